from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterator
from pathlib import Path

from ..models.archive_entry import ArchiveEntry

"""Virtual file tree -> ZIP archive.

Entries are accumulated in memory keyed by archive path and written out once
(finalize). 同一パスへの再登録は後勝ち (last write wins) とし、上書き件数を保持する。

The ZIP write is the only I/O here; OSError is wrapped in ArchiveWriteError and
left for the caller's top-level handler (no retry, no partial cleanup).
"""

__all__ = [
    "ArchiveWriteError",
    "MetadataArchive",
    "FIELD_META_SUFFIX",
    "build_entry_path",
]

FIELD_META_SUFFIX = ".field-meta.xml"

logger = logging.getLogger(__name__)


class ArchiveWriteError(Exception):
    pass


def build_entry_path(base_dir: str, object_name: str, field_name: str) -> str:
    """`<base>/<ObjectName>/fields/<FieldName>.field-meta.xml` (always "/" separated)."""
    return f"{base_dir}/{object_name}/fields/{field_name}{FIELD_META_SUFFIX}"


class MetadataArchive:
    """In-memory archive accumulator for a single run.

    - add() は同一パスを上書き (後勝ち)
    - write() は1回のみ (2回目は ArchiveWriteError)
    - スレッド安全性不要 (シリアル実行)
    """

    def __init__(self, base_dir: str) -> None:
        self.base_dir = base_dir
        self._entries: dict[str, str] = {}
        self._overwrites = 0
        self._written_to: Path | None = None

    @property
    def archive_name(self) -> str:
        return f"{self.base_dir}.zip"

    @property
    def overwrites(self) -> int:
        return self._overwrites

    @property
    def finalized(self) -> bool:
        return self._written_to is not None

    def add(self, entry: ArchiveEntry) -> bool:
        """Insert an entry. Returns True when an existing path was replaced."""
        if self.finalized:
            raise ArchiveWriteError(f"archive already written: {self._written_to}")
        replaced = entry.path in self._entries
        if replaced:
            self._overwrites += 1
            logger.warning("duplicate entry replaced (last wins): %s", entry.path)
        self._entries[entry.path] = entry.content
        return replaced

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[ArchiveEntry]:
        for path, content in self._entries.items():
            yield ArchiveEntry(path=path, content=content)

    def get(self, path: str) -> str | None:
        return self._entries.get(path)

    def write(self, output_dir: Path) -> Path:
        """Serialize all entries into `<output_dir>/<base_dir>.zip` and return its path."""
        if self.finalized:
            raise ArchiveWriteError(f"archive already written: {self._written_to}")
        zip_path = output_dir / self.archive_name
        try:
            zip_path.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for entry in self:
                    zf.writestr(entry.path, entry.content.encode("utf-8"))
        except OSError as e:
            raise ArchiveWriteError(f"failed to write archive {zip_path}: {e}") from e
        self._written_to = zip_path
        logger.debug("archive written path=%s entries=%d", zip_path, len(self._entries))
        return zip_path
