"""Schema authoring entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FragmentSource:
    """One fragment file; `text` is read from `path` when not supplied."""

    path: Path
    text: str | None = None


@dataclass(frozen=True)
class SplitResult:
    """Files written while splitting a composite schema."""

    destination: Path
    written: tuple[Path, ...]
