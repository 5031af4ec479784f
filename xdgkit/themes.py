"""Icon themes as described by their ``index.theme`` files."""

from __future__ import annotations

import enum
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from xdgkit.gtkcache import GtkIconCache

_INTEGER = re.compile(r"[+-]?\d+")


class DirType(enum.Enum):
    """How a theme directory's icons relate to their nominal size."""

    FIXED = "Fixed"
    SCALABLE = "Scalable"
    THRESHOLD = "Threshold"


@dataclass
class IconDirInfo:
    """A subdirectory of an icon theme with its size description."""

    path: str
    size: int = 0
    type: DirType = DirType.THRESHOLD
    max_size: int = 0
    min_size: int = 0
    threshold: int = 0
    scale: int = 1


def _read_index(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    section = ""
    text = path.read_text(encoding="utf-8", errors="replace")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in ";#":
            continue
        if line.startswith("["):
            end = line.find("]")
            section = line[1:end] if end > 0 else line[1:]
            if section == "General":
                section = ""
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        values[f"{section}/{key}" if section else key] = value.strip()
    return values


def _to_int(values: dict[str, str], key: str, default: int) -> int:
    if key not in values:
        return default
    text = values[key].strip()
    return int(text) if _INTEGER.fullmatch(text) else 0


def _to_bool(values: dict[str, str], key: str, default: bool) -> bool:
    if key not in values:
        return default
    text = values[key].strip().lower()
    return text not in ("", "0", "false")


def _to_list(values: dict[str, str], key: str) -> list[str]:
    if key not in values:
        return []
    return [part.strip() for part in values[key].split(",")]


def _dir_type(text: str) -> DirType:
    if text == "Fixed":
        return DirType.FIXED
    if text == "Scalable":
        return DirType.SCALABLE
    return DirType.THRESHOLD


class IconTheme:
    """An icon theme found across a list of search paths."""

    def __init__(
        self,
        name: str = "",
        search_paths: Iterable[str | os.PathLike[str]] = (),
        fallback_theme: str | None = None,
    ) -> None:
        self.name = name
        self.content_dirs: list[str] = []
        self.directories: list[IconDirInfo] = []
        self.parents: list[str] = []
        self.follows_color_scheme = False
        self.gtk_caches: list[GtkIconCache] = []
        self._valid = False
        if not name:
            return

        index_file: Path | None = None
        for search_path in search_paths:
            theme_dir = os.path.join(os.fspath(search_path), name)
            if os.path.isdir(theme_dir):
                self.content_dirs.append(theme_dir)
                self.gtk_caches.append(GtkIconCache(theme_dir))
            if not self._valid:
                candidate = Path(theme_dir) / "index.theme"
                if candidate.exists():
                    self._valid = True
                    index_file = candidate

        if index_file is not None:
            self._load_index(index_file, fallback_theme)

    def is_valid(self) -> bool:
        """Whether an ``index.theme`` was found for this theme."""
        return self._valid

    def _load_index(self, index_file: Path, fallback_theme: str | None) -> None:
        try:
            values = _read_index(index_file)
        except OSError:
            values = {}
        self.follows_color_scheme = _to_bool(values, "Icon Theme/FollowsColorScheme", False)

        for key in sorted(values):
            if not key.endswith("/Size"):
                continue
            size = _to_int(values, key, 0)
            if not size:
                continue
            directory = key[: -len("/Size")]
            self.directories.append(
                IconDirInfo(
                    path=directory,
                    size=size,
                    type=_dir_type(values.get(f"{directory}/Type", "")),
                    threshold=_to_int(values, f"{directory}/Threshold", 2),
                    min_size=_to_int(values, f"{directory}/MinSize", size),
                    max_size=_to_int(values, f"{directory}/MaxSize", size),
                    scale=_to_int(values, f"{directory}/Scale", 1),
                )
            )

        self.parents = [
            parent
            for parent in _to_list(values, "Icon Theme/Inherits")
            if parent and parent != "hicolor"
        ]
        if not self.parents and fallback_theme and fallback_theme != "hicolor":
            self.parents.append(fallback_theme)


def directory_matches_size(directory: IconDirInfo, icon_size: int, icon_scale: int) -> bool:
    """Whether icons in ``directory`` fit the requested size and scale exactly."""
    if directory.scale != icon_scale:
        return False
    if directory.type is DirType.FIXED:
        return directory.size == icon_size
    if directory.type is DirType.SCALABLE:
        return directory.min_size <= icon_size <= directory.max_size
    return (
        directory.size - directory.threshold
        <= icon_size
        <= directory.size + directory.threshold
    )


def directory_size_distance(directory: IconDirInfo, icon_size: int, icon_scale: int) -> int:
    """How far icons in ``directory`` are from the requested size and scale."""
    scaled = icon_size * icon_scale
    scale = directory.scale
    if directory.type is DirType.FIXED:
        return abs(directory.size * scale - scaled)
    if directory.type is DirType.SCALABLE:
        if scaled < directory.min_size * scale:
            return directory.min_size * scale - scaled
        if scaled > directory.max_size * scale:
            return scaled - directory.max_size * scale
        return 0
    if scaled < (directory.size - directory.threshold) * scale:
        return directory.min_size * scale - scaled
    if scaled > (directory.size + directory.threshold) * scale:
        return scaled - directory.max_size * scale
    return 0