# xdgkit

Tools for working with freedesktop.org desktop conventions:

- finding icon files through XDG icon themes, including parent themes, the
  `hicolor` theme, unthemed directories and pixmap directories
  (`/usr/share/pixmaps` by default);
- reading the GTK `icon-theme.cache` file to skip theme directories that
  cannot hold an icon;
- choosing the best icon entry for a requested size and scale, following the
  icon theme specification's size rules;
- recolouring SVG icons that carry a `<style id="current-color-scheme">`
  block;
- a small command-line tool that reports a file's MIME type.

It needs nothing beyond the Python standard library (3.10 or later).

## Installing

```
pip install .
```

## Command-line tools

### xdgkit-iconfinder

Look icons up by name and show which files were found:

```
xdgkit-iconfinder --theme Adwaita document-open edit-copy
```

For each name a line `name:found-name:milliseconds` is printed (the found
name is empty when nothing matched, and may be shorter than the requested
name when a dashed fallback such as `edit` for `edit-copy` was used),
followed by one tab-indented line per file found. A last line gives the total
lookup time.

Options:

- `--theme NAME` – the theme to search first (default `hicolor`);
- `--search-path DIR` – a directory holding icon themes; may be repeated.
  Without it, `$XDG_DATA_HOME/icons`, the `icons` directory of each entry in
  `$XDG_DATA_DIRS` and `~/.icons` are searched;
- `--pixmap-path DIR` – a directory searched last for unthemed icons; may be
  repeated (default `/usr/share/pixmaps`);
- `-v`, `--version`.

Run without icon names, it prints its help and exits with status 1.

### xdgkit-mat

Print the MIME type of a local file or `file:` URL:

```
xdgkit-mat mimetype report.pdf
```

The type is judged by the file name's extension; directories are reported as
`inode/directory` and unknown names as `application/octet-stream`. A missing
file, a URL with any other scheme, or the wrong number of arguments is
reported on standard error with exit status 1.

Run `xdgkit-mat --help` to list the available commands. Without a known
command the help is printed and the exit status is 1.

## Library use

```python
from xdgkit.iconloader import IconLoader, entry_for_size

loader = IconLoader(
    theme_name="Adwaita",
    search_paths=["/usr/share/icons"],
)
info = loader.load_icon("document-open")
best = entry_for_size(info.entries, 32, 1)
if best is not None:
    print(best.filename)
```

- `xdgkit.iconloader`: `IconLoader.load_icon()` returns an `IconInfo` with
  the matched `icon_name` and a list of `IconEntry` objects (file name,
  `EntryKind` and the theme directory's `IconDirInfo`). PNG entries come
  first. `entry_for_size()`, `actual_size()` and `available_sizes()` work on
  such a list. `set_follow_color_scheme()` controls whether SVG icons of
  themes with `FollowsColorScheme` are marked as
  `EntryKind.SCALABLE_FOLLOWS_COLOR`.
- `xdgkit.gtkcache`: `GtkIconCache(theme_dir).lookup(name)` returns the
  subdirectories of a theme that contain an icon; `icon_name_hash()` is the
  cache's hash function. A cache with bad offsets, a wrong version, or one
  older than the theme's directories is treated as invalid.
- `xdgkit.themes`: `IconTheme` parses a theme's `index.theme` (directories,
  parents, `FollowsColorScheme`); `directory_matches_size()` and
  `directory_size_distance()` apply the specification's size rules to an
  `IconDirInfo`.
- `xdgkit.colorscheme`: `recolor_svg(data, text, background, highlight)`
  appends the stylesheet built by `stylesheet()` to every colour-scheme style
  element and returns the document as UTF-8 bytes; it raises `ValueError` for
  malformed XML.
- `xdgkit.mat`: `MatCommand`, `CommandManager`, `MimeTypeCommand` and
  `parse_mimetype_args()` make up the command-line tool; argument errors
  raise `CommandLineError`.

## What it does not do

- Icons are only located, not drawn: nothing here loads, scales or paints
  images. `IconEntry.image_size()` only reads the dimensions from a PNG or
  XPM header.
- `xdgkit-mat` has only the `mimetype` command. It cannot read or change
  default applications, open files with an application, or launch desktop
  entries.
- MIME types come from file extensions only; file contents are not examined.