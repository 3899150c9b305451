"""Per-asset enrichment: fetch, generate alt text, write back, with retry."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from .client import StoryblokClient
from .config import ITEM_DELAY_SECONDS, MAX_RETRIES, RETRY_DELAY_SECONDS
from .models import Asset, ProcessResult, ProcessStatus
from .utils import is_blank

logger = logging.getLogger("storyblok_alt")


def build_updated_asset(asset: Asset, alt_text: str) -> Dict[str, Any]:
    """Shallow copy of the full record with ``alt`` set in both places."""
    payload = asset.to_dict()
    payload["alt"] = alt_text
    meta_data = dict(asset.meta_data or {})
    meta_data["alt"] = alt_text
    payload["meta_data"] = meta_data
    return payload


class AltTextEnricher:
    """Processes candidate assets one at a time against the management API.

    ``sleep`` is used for both the inter-item pause and the retry backoff, so
    tests can pass a no-op instead of waiting on the wall clock.
    """

    def __init__(
        self,
        client: StoryblokClient,
        *,
        dry_run: bool = False,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY_SECONDS,
        item_delay: float = ITEM_DELAY_SECONDS,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.client = client
        self.dry_run = dry_run
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.item_delay = item_delay
        self.sleep = sleep or time.sleep

    def _result(self, asset: Asset, status: ProcessStatus, **extra: Any) -> ProcessResult:
        return ProcessResult(
            id=asset.id,
            short_filename=asset.short_filename,
            status=status,
            **extra,
        )

    def _attempt(self, asset: Asset) -> ProcessResult:
        # The candidate filter already drops deleted assets; this guards direct callers.
        if asset.deleted_at is not None:
            return self._result(asset, ProcessStatus.SKIPPED_DELETED)

        full_asset = self.client.get_asset(asset.id)
        alt_text = self.client.generate_alt_text(full_asset)
        if is_blank(alt_text):
            logger.info("No alt text generated for asset %s", asset.id)
            return self._result(asset, ProcessStatus.NO_ALT_GENERATED)

        updated = build_updated_asset(full_asset, alt_text)
        if self.dry_run:
            logger.info("[dry-run] Would set alt for asset %s: %s", asset.id, alt_text)
        else:
            self.client.update_asset(full_asset.id, updated)
            logger.debug("Updated asset %s", asset.id)
        return self._result(asset, ProcessStatus.SUCCESS, alt=alt_text)

    def process_asset(self, asset: Asset) -> ProcessResult:
        """Run the whole per-asset sequence, replaying it from the start on failure.

        A replay after a successful write may generate and write again; no
        idempotency key is sent.
        """
        attempts = self.max_retries + 1
        last_error: Optional[BaseException] = None
        for attempt in range(1, attempts + 1):
            try:
                return self._attempt(asset)
            except Exception as exc:  # pylint: disable=broad-except
                last_error = exc
                if attempt < attempts:
                    logger.warning(
                        "Asset %s failed (attempt %d/%d): %s. Retrying in %.1fs",
                        asset.id,
                        attempt,
                        attempts,
                        exc,
                        self.retry_delay,
                    )
                    self.sleep(self.retry_delay)

        logger.error(
            "Asset %s failed after %d attempts: %s", asset.id, attempts, last_error
        )
        return self._result(asset, ProcessStatus.ERROR, error=str(last_error))

    def run(self, assets: Sequence[Asset]) -> List[ProcessResult]:
        """Process assets sequentially, pausing after each one."""
        results: List[ProcessResult] = []
        total = len(assets)
        for index, asset in enumerate(assets, start=1):
            logger.info(
                "Processing %d/%d - ID: %s, File: %s",
                index,
                total,
                asset.id,
                asset.short_filename,
            )
            results.append(self.process_asset(asset))
            self.sleep(self.item_delay)
        return results
