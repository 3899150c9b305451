"""Data models used throughout the backfill pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ProcessStatus(str, Enum):
    """Outcome of processing a single asset."""

    SKIPPED_DELETED = "skipped_deleted"
    NO_ALT_GENERATED = "no_alt_generated"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Asset:
    """Transient copy of a Storyblok asset record."""

    id: Any
    short_filename: Optional[str] = None
    alt: Optional[str] = None
    meta_data: Dict[str, Any] = field(default_factory=dict)
    deleted_at: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Asset":
        return cls(
            id=data.get("id"),
            short_filename=data.get("short_filename"),
            alt=data.get("alt"),
            meta_data=dict(data.get("meta_data") or {}),
            deleted_at=data.get("deleted_at"),
            raw=dict(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the full record, with the modelled fields laid over ``raw``."""
        payload = dict(self.raw)
        if self.meta_data:
            meta_data = dict(self.meta_data)
        else:
            # an empty or null mapping goes back exactly as fetched
            meta_data = self.raw.get("meta_data")
        fields = {
            "id": self.id,
            "short_filename": self.short_filename,
            "alt": self.alt,
            "meta_data": meta_data,
            "deleted_at": self.deleted_at,
        }
        for key, value in fields.items():
            if key in self.raw or value is not None:
                payload[key] = value
        return payload


@dataclass
class ProcessResult:
    """Per-asset outcome recorded in the run report."""

    id: Any
    short_filename: Optional[str]
    status: ProcessStatus
    alt: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "short_filename": self.short_filename,
            "status": self.status.value,
        }
        if self.status is ProcessStatus.SUCCESS:
            payload["alt"] = self.alt
        elif self.status is ProcessStatus.ERROR:
            payload["error"] = self.error
        return payload
