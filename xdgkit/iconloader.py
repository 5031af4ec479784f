"""Finding icon files by name across themes, following the XDG icon theme rules."""

from __future__ import annotations

import enum
import os
import re
import struct
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from xdgkit.themes import (
    DirType,
    IconDirInfo,
    IconTheme,
    directory_matches_size,
    directory_size_distance,
)

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_XPM_VALUES = re.compile(rb'"\s*(\d+)\s+(\d+)\s+\d+\s+\d+')
_DEFAULT_PIXMAP_PATHS = ("/usr/share/pixmaps",)


class EntryKind(enum.Enum):
    """How an icon file is rendered."""

    PIXMAP = "pixmap"
    SCALABLE = "scalable"
    SCALABLE_FOLLOWS_COLOR = "scalable-follows-color"

    @property
    def is_scalable(self) -> bool:
        return self is not EntryKind.PIXMAP


@dataclass
class IconEntry:
    """One icon file together with the theme directory it was found in."""

    filename: str
    kind: EntryKind = EntryKind.PIXMAP
    directory: IconDirInfo = field(default_factory=lambda: IconDirInfo(""))

    def image_size(self) -> tuple[int, int]:
        """Width and height stored in the file's header, or (0, 0) if unknown."""
        try:
            with open(self.filename, "rb") as handle:
                head = handle.read(4096)
        except OSError:
            return (0, 0)
        if head.startswith(_PNG_SIGNATURE) and head[12:16] == b"IHDR" and len(head) >= 24:
            return struct.unpack(">II", head[16:24])
        match = _XPM_VALUES.search(head)
        if match:
            return (int(match.group(1)), int(match.group(2)))
        return (0, 0)


@dataclass
class IconInfo:
    """The result of an icon lookup: the name that matched and its files."""

    icon_name: str = ""
    entries: list[IconEntry] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.entries)


class IconLoader:
    """Looks icons up in a theme, its parents, hicolor and plain directories.

    Where a more specific dashed name (``input-mouse-usb``) exists only in a
    parent theme, it is preferred over a generic name in the current theme.
    """

    def __init__(
        self,
        theme_name: str = "",
        search_paths: Iterable[str | os.PathLike[str]] = (),
        fallback_theme: str | None = None,
        pixmap_paths: Iterable[str | os.PathLike[str]] = _DEFAULT_PIXMAP_PATHS,
        follow_color_scheme: bool = True,
    ) -> None:
        self.theme_name = theme_name
        self.search_paths = [os.fspath(path) for path in search_paths]
        self.fallback_theme = fallback_theme
        self.pixmap_paths = [os.fspath(path) for path in pixmap_paths]
        self.follow_color_scheme = follow_color_scheme
        self.theme_key = 0
        self._themes: dict[str, IconTheme] = {}

    def set_follow_color_scheme(self, enable: bool) -> None:
        """Honour or ignore the FollowsColorScheme hint of themes."""
        if self.follow_color_scheme != enable:
            self.theme_key += 1
            self.follow_color_scheme = enable

    def theme(self) -> IconTheme:
        """The loaded theme for the current theme name, or an empty theme."""
        return self._themes.get(self.theme_name, IconTheme())

    def load_icon(self, name: str) -> IconInfo:
        """Find the files for icon ``name``; an empty result if there are none."""
        if not self.theme_name:
            return IconInfo()
        visited: list[str] = []
        info = self._find_icon(self.theme_name, name, visited, True)
        if info.entries:
            return info
        info = self._find_icon("hicolor", name, visited, True)
        if info.entries:
            return info
        info = self._unthemed_fallback(name, self.search_paths)
        if info.entries:
            return info
        info = self._unthemed_fallback(name, self.pixmap_paths)
        return info if info.entries else IconInfo()

    def _fallback(self) -> str | None:
        if self.fallback_theme and self.fallback_theme != "hicolor":
            return self.fallback_theme
        return None

    def _load_theme(self, theme_name: str) -> IconTheme:
        theme = self._themes.get(theme_name)
        if theme is None or not theme.is_valid():
            fallback = self._fallback()
            theme = IconTheme(theme_name, self.search_paths, fallback)
            if not theme.is_valid() and fallback:
                theme = IconTheme(fallback, self.search_paths, fallback)
            self._themes[theme_name] = theme
        return theme

    def _find_icon(
        self, theme_name: str, icon_name: str, visited: list[str], dash_fallback: bool = False
    ) -> IconInfo:
        visited.append(theme_name)
        theme = self._load_theme(theme_name)
        info = IconInfo()
        scalable_kind = (
            EntryKind.SCALABLE_FOLLOWS_COLOR
            if self.follow_color_scheme and theme.follows_color_scheme
            else EntryKind.SCALABLE
        )

        for content_dir, cache in zip(theme.content_dirs, theme.gtk_caches):
            sub_dirs = list(theme.directories)
            if cache.is_valid() or cache.revalidate(True):
                found = cache.lookup(icon_name)
                if cache.is_valid():
                    by_path: dict[str, IconDirInfo] = {}
                    for directory in theme.directories:
                        by_path.setdefault(directory.path, directory)
                    sub_dirs = [by_path[path] for path in found if path in by_path]

            for directory in sub_dirs:
                base = f"{content_dir}/{directory.path}/{icon_name}"
                png_path = base + ".png"
                svg_path = base + ".svg"
                xpm_path = base + ".xpm"
                if os.path.exists(png_path):
                    # pixmaps always come before scalable entries
                    info.entries.insert(0, IconEntry(png_path, EntryKind.PIXMAP, directory))
                elif os.path.exists(svg_path):
                    info.entries.append(IconEntry(svg_path, scalable_kind, directory))
                if os.path.exists(xpm_path):
                    info.entries.append(IconEntry(xpm_path, EntryKind.PIXMAP, directory))

        if info.entries:
            info.icon_name = icon_name
            return info

        for parent in theme.parents:
            parent = parent.strip()
            if parent not in visited:
                info = self._find_icon(parent, icon_name, visited)
            if info.entries:
                return info

        if dash_fallback:
            dash = icon_name.rfind("-")
            if dash != -1:
                info = self._find_icon(theme_name, icon_name[:dash], [], True)
        return info

    @staticmethod
    def _unthemed_fallback(icon_name: str, search_paths: Sequence[str]) -> IconInfo:
        info = IconInfo()
        for content_dir in search_paths:
            png_path = os.path.join(content_dir, icon_name + ".png")
            svg_path = os.path.join(content_dir, icon_name + ".svg")
            xpm_path = os.path.join(content_dir, icon_name + ".xpm")
            if os.path.exists(png_path):
                info.entries.insert(0, IconEntry(png_path, EntryKind.PIXMAP))
            elif os.path.exists(svg_path):
                info.entries.append(IconEntry(svg_path, EntryKind.SCALABLE))
            elif os.path.exists(xpm_path):
                info.entries.append(IconEntry(xpm_path, EntryKind.PIXMAP))
        return info


def entry_for_size(entries: Sequence[IconEntry], size: int, scale: int = 1) -> IconEntry | None:
    """The entry whose directory fits ``size`` exactly, else the closest one."""
    for entry in entries:
        if directory_matches_size(entry.directory, size, scale):
            return entry
    best: IconEntry | None = None
    best_distance: int | None = None
    for entry in entries:
        distance = directory_size_distance(entry.directory, size, scale)
        if best_distance is None or distance < best_distance:
            best, best_distance = entry, distance
    return best


def actual_size(entries: Sequence[IconEntry], width: int, height: int) -> tuple[int, int]:
    """The size an icon is drawn at; never larger than requested unless scalable."""
    entry = entry_for_size(entries, min(width, height))
    if entry is None:
        return (0, 0)
    if entry.directory.type is DirType.SCALABLE or entry.kind.is_scalable:
        return (width, height)
    dir_size = entry.directory.size
    if dir_size == 0:
        image_width, image_height = entry.image_size()
        dir_size = min(image_width, image_height)
    result = min(dir_size, width, height)
    return (result, result)


def available_sizes(entries: Sequence[IconEntry]) -> list[tuple[int, int]]:
    """The nominal sizes of the directories the entries were found in."""
    return [(entry.directory.size, entry.directory.size) for entry in entries]