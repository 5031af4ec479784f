"""The mime-apps tool: subcommands for looking at files' mime types."""

from __future__ import annotations

import abc
import argparse
import mimetypes
import os
import sys
from typing import NoReturn, Sequence
from urllib.parse import urlsplit
from urllib.request import url2pathname

VERSION = "1.0.0"
PROG = "mat"


class CommandLineError(Exception):
    """The command line given to a subcommand is not usable."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise CommandLineError(message)


class MatCommand(abc.ABC):
    """A subcommand of the tool, known by its name."""

    def __init__(self, name: str, description: str) -> None:
        self.name = name
        self.description = description

    @abc.abstractmethod
    def run(self, args: Sequence[str]) -> int:
        """Run with the tool's arguments (starting with the command name); return the exit code."""


class CommandManager:
    """Holds the available subcommands in the order they were added."""

    def __init__(self) -> None:
        self._commands: list[MatCommand] = []

    def add(self, command: MatCommand) -> None:
        self._commands.append(command)

    def commands(self) -> list[MatCommand]:
        return list(self._commands)

    def descriptions_help_text(self) -> str:
        """One aligned ``name  description`` line per command."""
        width = max((len(command.name) for command in self._commands), default=0) + 2
        return "".join(
            f"{('  ' + command.name).ljust(width)}  {command.description}\n"
            for command in self._commands
        )


def _mimetype_parser() -> _ArgumentParser:
    parser = _ArgumentParser(
        prog=f"{PROG} mimetype", description="Determines a file (mime)type"
    )
    parser.add_argument("files", nargs="*", metavar="file | URL")
    parser.add_argument("-v", "--version", action="version", version=f"{PROG} {VERSION}")
    return parser


def parse_mimetype_args(args: Sequence[str]) -> str:
    """Return the one file or URL named after the ``mimetype`` command word."""
    positional = _mimetype_parser().parse_args(list(args)).files
    if len(positional) < 2:
        raise CommandLineError("No file given")
    if len(positional) > 2:
        raise CommandLineError("Only one file, please")
    return positional[1]


def _mime_type_for(path: str) -> str:
    if os.path.isdir(path):
        return "inode/directory"
    guessed, _ = mimetypes.guess_type(path, strict=False)
    return guessed or "application/octet-stream"


class MimeTypeCommand(MatCommand):
    """Prints the mime type of a local file, judged by its name."""

    def __init__(self) -> None:
        super().__init__("mimetype", "Determines a file (mime)type")

    def run(self, args: Sequence[str]) -> int:
        try:
            target = parse_mimetype_args(args)
        except CommandLineError as error:
            sys.stderr.write(f"{error}\n\n{_mimetype_parser().format_help()}")
            return 1

        scheme = urlsplit(target).scheme
        if not scheme:
            local = target
        elif scheme == "file":
            local = url2pathname(urlsplit(target).path)
        else:
            sys.stderr.write(f"Can't handle '{target}': '{scheme}' scheme not supported\n")
            return 1

        if not os.path.exists(local):
            sys.stderr.write(f"Cannot access '{target}': No such file or directory\n")
            return 1
        print(_mime_type_for(local))
        return 0


def _main_help(manager: CommandManager) -> str:
    parser = argparse.ArgumentParser(prog=PROG, description="MimeApps Tool")
    parser.add_argument("command", help="Command to execute.")
    parser.add_argument("-v", "--version", action="store_true", help="Displays version information.")
    return (
        parser.format_help()
        + "\nAvailable commands:\n"
        + manager.descriptions_help_text()
        + "\n"
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Dispatch to the subcommand named by the first positional argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    manager = CommandManager()
    manager.add(MimeTypeCommand())

    command_name = next((arg for arg in args if not arg.startswith("-")), "")
    for command in manager.commands():
        if command.name == command_name:
            return command.run(args)

    if "-h" in args or "--help" in args:
        sys.stdout.write(_main_help(manager))
        return 0
    if "-v" in args or "--version" in args:
        print(f"{PROG} {VERSION}")
        return 0
    sys.stdout.write(_main_help(manager))
    return 1