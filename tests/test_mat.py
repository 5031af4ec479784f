from pathlib import Path

import pytest

from xdgkit.mat import (
    CommandLineError,
    CommandManager,
    MatCommand,
    MimeTypeCommand,
    main,
    parse_mimetype_args,
)


class _Echo(MatCommand):
    def run(self, args):
        return len(args)


def test_manager_keeps_commands_in_order():
    manager = CommandManager()
    first, second = _Echo("one", "First"), _Echo("two", "Second")
    manager.add(first)
    manager.add(second)
    assert manager.commands() == [first, second]


def test_descriptions_are_aligned():
    manager = CommandManager()
    manager.add(_Echo("ab", "Short"))
    manager.add(_Echo("longer", "Long"))
    lines = manager.descriptions_help_text().splitlines()
    assert lines[0] == "  ab      Short"
    assert lines[0].index("Short") == lines[1].index("Long")


def test_descriptions_empty_manager():
    assert CommandManager().descriptions_help_text() == ""


def test_parse_requires_a_file():
    with pytest.raises(CommandLineError, match="No file given"):
        parse_mimetype_args(["mimetype"])


def test_parse_rejects_two_files():
    with pytest.raises(CommandLineError, match="Only one file, please"):
        parse_mimetype_args(["mimetype", "a", "b"])


def test_parse_returns_the_file():
    assert parse_mimetype_args(["mimetype", "x.txt"]) == "x.txt"


def test_parse_unknown_option_is_error():
    with pytest.raises(CommandLineError):
        parse_mimetype_args(["mimetype", "--bogus", "x.txt"])


def test_mimetype_of_text_file(tmp_path: Path, capsys):
    target = tmp_path / "a.txt"
    target.write_text("hello", encoding="utf-8")
    assert MimeTypeCommand().run(["mimetype", str(target)]) == 0
    assert capsys.readouterr().out == "text/plain\n"


def test_mimetype_of_file_url(tmp_path: Path, capsys):
    target = tmp_path / "a.txt"
    target.write_text("hello", encoding="utf-8")
    assert MimeTypeCommand().run(["mimetype", target.as_uri()]) == 0
    assert capsys.readouterr().out == "text/plain\n"


def test_mimetype_of_directory(tmp_path: Path, capsys):
    assert MimeTypeCommand().run(["mimetype", str(tmp_path)]) == 0
    assert capsys.readouterr().out == "inode/directory\n"


def test_missing_file_fails(tmp_path: Path, capsys):
    missing = str(tmp_path / "nope.txt")
    assert MimeTypeCommand().run(["mimetype", missing]) == 1
    assert capsys.readouterr().err == f"Cannot access '{missing}': No such file or directory\n"


def test_remote_scheme_fails(capsys):
    url = "http://example.com/a.txt"
    assert MimeTypeCommand().run(["mimetype", url]) == 1
    assert capsys.readouterr().err == f"Can't handle '{url}': 'http' scheme not supported\n"


def test_run_reports_parse_error_with_help(capsys):
    assert MimeTypeCommand().run(["mimetype"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("No file given\n\n")
    assert "usage:" in err


def test_main_dispatches_to_mimetype(tmp_path: Path, capsys):
    target = tmp_path / "b.txt"
    target.write_text("x", encoding="utf-8")
    assert main(["mimetype", str(target)]) == 0
    assert capsys.readouterr().out == "text/plain\n"


def test_main_without_command_shows_commands(capsys):
    assert main([]) == 1
    out = capsys.readouterr().out
    assert "Available commands:\n" in out
    assert "Determines a file (mime)type" in out


def test_main_help_succeeds(capsys):
    assert main(["--help"]) == 0
    assert "Available commands:" in capsys.readouterr().out


def test_main_unknown_command_fails(capsys):
    assert main(["bogus"]) == 1
    assert "mimetype" in capsys.readouterr().out


def test_main_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.startswith("mat ")