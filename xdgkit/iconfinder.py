"""Command that looks icons up by name and reports the files found."""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import Sequence

from xdgkit.iconloader import IconLoader

VERSION = "1.0.0"
PROG = "iconfinder"


def _default_search_paths() -> list[str]:
    data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    data_dirs = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"
    paths = [os.path.join(data_home, "icons")]
    paths.extend(os.path.join(entry, "icons") for entry in data_dirs.split(":") if entry)
    paths.append(str(Path.home() / ".icons"))
    return paths


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="Icon finder")
    parser.add_argument("iconnames", nargs="*", help="The icon names to search for")
    parser.add_argument("--theme", default="hicolor", help="Icon theme to search in")
    parser.add_argument(
        "--search-path",
        action="append",
        dest="search_paths",
        metavar="DIR",
        help="Directory holding icon themes (may be repeated)",
    )
    parser.add_argument(
        "--pixmap-path",
        action="append",
        dest="pixmap_paths",
        metavar="DIR",
        help="Directory searched last for unthemed icons (may be repeated)",
    )
    parser.add_argument("-v", "--version", action="version", version=f"{PROG} {VERSION}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Look up each icon name, printing its files and the time each lookup took."""
    parser = _build_parser()
    options = parser.parse_args(list(sys.argv[1:] if argv is None else argv))
    if not options.iconnames:
        sys.stdout.write(parser.format_help())
        return 1

    search_paths = options.search_paths or _default_search_paths()
    if options.pixmap_paths:
        loader = IconLoader(options.theme, search_paths, pixmap_paths=options.pixmap_paths)
    else:
        loader = IconLoader(options.theme, search_paths)

    total_elapsed = 0
    for icon_name in options.iconnames:
        start = time.monotonic_ns()
        info = loader.load_icon(icon_name)
        elapsed = (time.monotonic_ns() - start) // 1_000_000
        print(f"{icon_name}:{info.icon_name}:{elapsed}")
        for entry in info.entries:
            print(f"\t{entry.filename}")
        total_elapsed += elapsed

    print(f"Total loadIcon() time: {total_elapsed} ms")
    return 0