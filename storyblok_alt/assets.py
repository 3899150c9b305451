"""Listing and filtering of the remote asset library."""

from __future__ import annotations

import logging
from typing import Iterable, List

from .client import StoryblokClient
from .config import PAGE_SIZE
from .models import Asset
from .utils import is_blank

logger = logging.getLogger("storyblok_alt")


def fetch_all_assets(client: StoryblokClient, per_page: int = PAGE_SIZE) -> List[Asset]:
    """Walk every page of the asset library until a short page is returned.

    Transport errors propagate; there is no retry at this level.
    """
    assets: List[Asset] = []
    page = 1
    while True:
        batch = client.list_assets(page, per_page)
        logger.debug("Fetched page %d (%d assets)", page, len(batch))
        assets.extend(batch)
        if len(batch) < per_page:
            break
        page += 1
    return assets


def needs_alt_text(asset: Asset) -> bool:
    """Active asset whose alt text is missing or blank."""
    return asset.deleted_at is None and is_blank(asset.alt)


def filter_assets_without_alt(assets: Iterable[Asset]) -> List[Asset]:
    return [asset for asset in assets if needs_alt_text(asset)]
