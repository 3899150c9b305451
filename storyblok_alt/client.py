"""Thin wrapper around the Storyblok management API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .config import AltTextConfig, PAGE_SIZE
from .errors import StoryblokAPIError
from .models import Asset

logger = logging.getLogger("storyblok_alt")


def _response_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class StoryblokClient:
    """Session bound to one space, base URL and token for the whole run."""

    def __init__(
        self,
        config: AltTextConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = config.api_url.rstrip("/")
        self.space_id = config.space_id
        self.timeout = config.timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": config.token,
                "Content-Type": "application/json",
            }
        )

    def _url(self, path: str) -> str:
        return f"{self.base_url}/spaces/{self.space_id}{path}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.HTTPError as exc:
            response = exc.response
            raise StoryblokAPIError(
                str(exc),
                status_code=response.status_code if response is not None else None,
                body=_response_body(response) if response is not None else None,
            ) from exc
        except requests.RequestException as exc:
            raise StoryblokAPIError(str(exc)) from exc
        if not resp.content:
            return None
        return _response_body(resp)

    def list_assets(self, page: int, per_page: int = PAGE_SIZE) -> List[Asset]:
        """Return one page of the space's asset library."""
        data = self._request(
            "GET", "/assets", params={"page": page, "per_page": per_page}
        )
        if not isinstance(data, dict):
            raise StoryblokAPIError(f"Unexpected asset listing for page {page}: {data!r}")
        items = data.get("assets") or []
        if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
            raise StoryblokAPIError(f"Malformed asset listing for page {page}: {items!r}")
        return [Asset.from_dict(item) for item in items]

    def get_asset(self, asset_id: Any) -> Asset:
        data = self._request("GET", f"/assets/{asset_id}")
        if not isinstance(data, dict):
            raise StoryblokAPIError(f"Unexpected response for asset {asset_id}: {data!r}")
        return Asset.from_dict(data)

    def generate_alt_text(self, asset: Asset) -> Optional[str]:
        """Ask the service to describe the image; returns ``None`` when it declines."""
        data = self._request(
            "POST",
            f"/assets/{asset.id}/generate_image_alt_text",
            json=asset.to_dict(),
        )
        if not isinstance(data, dict):
            return None
        text = data.get("response")
        return text if isinstance(text, str) else None

    def update_asset(self, asset_id: Any, payload: Dict[str, Any]) -> None:
        self._request("PUT", f"/assets/{asset_id}", json={"asset": payload})
