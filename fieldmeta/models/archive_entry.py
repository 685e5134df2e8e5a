from __future__ import annotations

from dataclasses import dataclass

"""ArchiveEntry model: one (path, content) pair destined for the output ZIP."""

__all__ = [
    "ArchiveEntry",
]


@dataclass(frozen=True)
class ArchiveEntry:
    path: str  # "/" 区切りのアーカイブ内パス
    content: str  # generated field-meta.xml text
