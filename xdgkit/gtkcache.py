"""Reader for the ``icon-theme.cache`` files written by gtk-update-icon-cache."""

from __future__ import annotations

import os
import struct
from pathlib import Path

CACHE_FILE_NAME = "icon-theme.cache"
_MAJOR_VERSION = 1


def icon_name_hash(name: str | bytes) -> int:
    """Return the 32-bit hash the GTK icon cache uses for an icon name."""
    raw = name.encode("utf-8") if isinstance(name, str) else bytes(name)
    raw = raw.split(b"\0", 1)[0]
    if not raw:
        return 0
    signed = [byte - 256 if byte > 127 else byte for byte in raw]
    value = signed[0] & 0xFFFFFFFF
    for byte in signed[1:]:
        value = ((value << 5) - value + byte) & 0xFFFFFFFF
    return value


def _mtime_ms(info: os.stat_result) -> int:
    return info.st_mtime_ns // 1_000_000


def _stat(path: Path) -> os.stat_result | None:
    try:
        return path.stat()
    except OSError:
        return None


def _signature(info: os.stat_result | None) -> tuple[int, int, int] | None:
    if info is None:
        return None
    return (info.st_mtime_ns, info.st_size, info.st_ino)


class GtkIconCache:
    """Looks up icon names in a theme directory's GTK icon cache.

    Any inconsistency found in the file (bad offsets, misaligned reads,
    a wrong version) marks the cache as invalid. A cache whose file has
    changed on disk since it was read is invalid as well.
    """

    def __init__(self, theme_dir: str | os.PathLike[str]) -> None:
        self.path = Path(theme_dir).absolute() / CACHE_FILE_NAME
        self._data = b""
        self._valid = False
        self._cache_stat: os.stat_result | None = None
        self._signature: tuple[int, int, int] | None = None
        self.revalidate(False)

    def is_valid(self) -> bool:
        """Whether the cache was read successfully and has not changed since."""
        if self._valid and _signature(_stat(self.path)) != self._signature:
            self._valid = False
        return self._valid

    def revalidate(self, refresh: bool) -> bool:
        """Re-read the cache file; ``refresh`` re-reads its file information."""
        self._data = b""
        if refresh or self._cache_stat is None:
            self._cache_stat = _stat(self.path)
        cache_info = self._cache_stat
        directory = self.path.parent
        dir_info = _stat(directory)

        if cache_info is None:
            return self._valid
        if dir_info is not None and _mtime_ms(cache_info) < _mtime_ms(dir_info):
            return self._valid

        try:
            with open(self.path, "rb") as handle:
                data = handle.read()
                signature = _signature(os.fstat(handle.fileno()))
        except OSError:
            return self._valid
        self._data = data
        self._signature = signature

        if self._read16(0) != _MAJOR_VERSION:
            return self._valid

        self._valid = True

        last_modified = _mtime_ms(cache_info)
        dir_list_offset = self._read32(8)
        dir_list_len = self._read32(dir_list_offset)
        for index in range(dir_list_len):
            offset = self._read32(dir_list_offset + 4 + 4 * index)
            if not self._valid or offset >= len(self._data):
                self._valid = False
                return self._valid
            sub_info = _stat(directory / self._string_at(offset))
            if sub_info is not None and last_modified < _mtime_ms(sub_info):
                self._valid = False
                return self._valid
        return self._valid

    def lookup(self, name: str) -> list[str]:
        """Return the theme subdirectories that hold an icon called ``name``."""
        found: list[str] = []
        if not self.is_valid() or not name:
            return found

        name_bytes = name.encode("utf-8")
        bucket_hash = icon_name_hash(name_bytes)

        hash_offset = self._read32(4)
        bucket_count = self._read32(hash_offset)
        if not self._valid or bucket_count == 0:
            self._valid = False
            return found

        size = len(self._data)
        bucket_offset = self._read32(hash_offset + 4 + (bucket_hash % bucket_count) * 4)
        seen: set[int] = set()
        while 0 < bucket_offset <= size - 12 and bucket_offset not in seen:
            seen.add(bucket_offset)
            name_offset = self._read32(bucket_offset + 4)
            if name_offset < size and self._bytes_at(name_offset) == name_bytes:
                dir_list_offset = self._read32(8)
                dir_list_len = self._read32(dir_list_offset)
                list_offset = self._read32(bucket_offset + 8)
                list_len = self._read32(list_offset)

                if not self._valid or list_offset + 4 + 8 * list_len > size:
                    self._valid = False
                    return found

                for index in range(list_len):
                    if not self._valid:
                        break
                    dir_index = self._read16(list_offset + 4 + 8 * index)
                    offset = self._read32(dir_list_offset + 4 + dir_index * 4)
                    if not self._valid or dir_index >= dir_list_len or offset >= size:
                        self._valid = False
                        return found
                    found.append(self._string_at(offset))
                return found
            bucket_offset = self._read32(bucket_offset)
        return found

    def _read16(self, offset: int) -> int:
        if offset < 0 or offset + 2 > len(self._data) or offset & 0x1:
            self._valid = False
            return 0
        return struct.unpack_from(">H", self._data, offset)[0]

    def _read32(self, offset: int) -> int:
        if offset < 0 or offset + 4 > len(self._data) or offset & 0x3:
            self._valid = False
            return 0
        return struct.unpack_from(">I", self._data, offset)[0]

    def _bytes_at(self, offset: int) -> bytes:
        end = self._data.find(b"\0", offset)
        return self._data[offset:] if end == -1 else self._data[offset:end]

    def _string_at(self, offset: int) -> str:
        return self._bytes_at(offset).decode("utf-8", errors="replace")