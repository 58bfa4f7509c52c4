"""Explicit editing state for the single photo currently being adjusted."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional

from ..config import NEUTRAL_BRIGHTNESS
from .capture import CapturedPhoto
from .color_transform import ColorTransform, clamp_level, compute_transform


@dataclass(frozen=True)
class ExportSnapshot:
    """Immutable hand-off to the background export: which file, which filter."""

    photo: CapturedPhoto
    transform: ColorTransform


@dataclass(frozen=True)
class SessionState:
    """Current photo, brightness level and export flag as one value.

    Transitions return new instances; the controller swaps its reference so a
    background task holding an older snapshot never observes later edits.
    """

    photo: Optional[CapturedPhoto] = None
    level: int = NEUTRAL_BRIGHTNESS
    exporting: bool = False

    @property
    def has_photo(self) -> bool:
        return self.photo is not None

    @property
    def brightness_visible(self) -> bool:
        return self.has_photo

    @property
    def can_commit(self) -> bool:
        return self.has_photo and not self.exporting

    @property
    def transform(self) -> ColorTransform:
        return compute_transform(self.level)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def with_photo(self, photo: CapturedPhoto) -> "SessionState":
        """Adopt a freshly captured *photo* and reset the slider to neutral."""

        return replace(self, photo=photo, level=NEUTRAL_BRIGHTNESS)

    def with_level(self, level: float) -> "SessionState":
        return replace(self, level=clamp_level(level))

    def with_exporting(self, exporting: bool) -> "SessionState":
        return replace(self, exporting=bool(exporting))

    def snapshot(self) -> ExportSnapshot:
        """Return the export hand-off for the current photo and level."""

        if self.photo is None:
            raise ValueError("Cannot snapshot a session without a photo")
        return ExportSnapshot(self.photo, self.transform)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        photo = None
        if self.photo is not None:
            photo = {
                "path": str(self.photo.path),
                "captured_at": self.photo.captured_at.isoformat(),
            }
        return {"photo": photo, "level": self.level, "exporting": self.exporting}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionState":
        photo_data = data.get("photo")
        photo = None
        if photo_data:
            photo = CapturedPhoto(
                Path(photo_data["path"]),
                datetime.fromisoformat(photo_data["captured_at"]),
            )
        return cls(
            photo=photo,
            level=clamp_level(data.get("level", NEUTRAL_BRIGHTNESS)),
            exporting=bool(data.get("exporting", False)),
        )


__all__ = ["ExportSnapshot", "SessionState"]
