from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from storyblok_alt.config import AltTextConfig
from storyblok_alt.errors import StoryblokAPIError
from storyblok_alt.models import Asset


class FakeClient:
    """In-memory stand-in for StoryblokClient that records every call."""

    def __init__(
        self,
        assets: Optional[List[Dict[str, Any]]] = None,
        generated: Optional[Dict[Any, Optional[str]]] = None,
    ) -> None:
        self.records = {item["id"]: dict(item) for item in assets or []}
        self.order = [item["id"] for item in assets or []]
        self.generated = generated or {}
        self.failures: Dict[str, int] = {}
        self.calls: List[tuple] = []
        self.updates: List[tuple] = []

    def fail(self, operation: str, times: int) -> None:
        self.failures[operation] = times

    def _maybe_fail(self, operation: str) -> None:
        remaining = self.failures.get(operation, 0)
        if remaining:
            self.failures[operation] = remaining - 1
            raise StoryblokAPIError(f"{operation} failed", status_code=500)

    def list_assets(self, page: int, per_page: int = 100) -> List[Asset]:
        self.calls.append(("list", page, per_page))
        self._maybe_fail("list")
        start = (page - 1) * per_page
        ids = self.order[start:start + per_page]
        return [Asset.from_dict(self.records[i]) for i in ids]

    def get_asset(self, asset_id: Any) -> Asset:
        self.calls.append(("get", asset_id))
        self._maybe_fail("get")
        return Asset.from_dict(self.records[asset_id])

    def generate_alt_text(self, asset: Asset) -> Optional[str]:
        self.calls.append(("generate", asset.id))
        self._maybe_fail("generate")
        return self.generated.get(asset.id)

    def update_asset(self, asset_id: Any, payload: Dict[str, Any]) -> None:
        self.calls.append(("update", asset_id))
        self._maybe_fail("update")
        self.updates.append((asset_id, payload))


def make_asset(asset_id: Any, alt: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    record = {
        "id": asset_id,
        "short_filename": f"image-{asset_id}.jpg",
        "alt": alt,
        "meta_data": {},
        "deleted_at": None,
    }
    record.update(extra)
    return record


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def config(tmp_path) -> AltTextConfig:
    return AltTextConfig(token="secret-token", space_id="12345", report_dir=tmp_path)
