"""
Argsmith parser: declare, parse, retrieve.

What this module provides
- ArgumentParser: owns one registry (declared specs) and the value store of
  its latest parse.
  • add_argument(...): declare a spec; registration faults raise immediately.
  • parse_args(argv): scan, validate and coerce; returns a ParseStatus and
    never raises parse faults (they are rendered to the error console).
  • get / get_list / get_with_default / has_argument / get_all_keys: typed
    retrieval from the latest store (retrieval faults raise).
  • format_help / print_help: rich-rendered usage.
- ParseStatus: SUCCESS (0), HELP (1), ERROR (-1).

Quick start
    from argsmith import ArgumentParser, ParseStatus

    parser = ArgumentParser("convert", "convert data files")
    parser.add_argument(["input"], "input file", "str", required=True)
    parser.add_argument(["-v", "--verbose"], "chatty output", "bool")
    parser.add_argument(["--count"], "items to process", "int", default="10")
    parser.add_argument(["--format"], "output format", "str", default="json", choices={"json", "xml", "csv"})
    parser.add_argument(["--files"], "additional files", "str", nargs="*")

    if parser.parse_args() != ParseStatus.SUCCESS:
        raise SystemExit(1)

    count = parser.get("count", int)
    files = parser.get_list("files", str)

Design notes
- Each parse_args call builds a fresh ValueStore; a failed parse leaves an
  empty store, a help request leaves {"help": True}.
- argv item zero is the program name and is skipped, as in sys.argv.
"""
import io
import os.path
import shlex
import sys
from collections.abc import Iterable
from enum import IntEnum

from rich.console import Console

from .arguments import ArgumentSpec
from .faults import ParseError, ParserWarning, trigger
from .helper import render_help
from .registry import Registry, HELP_KEY
from .scanner import Scanner
from .store import ValueStore
from .utils import *
from .values import ArgumentType, Single


class ParseStatus(IntEnum):
    SUCCESS = 0
    HELP = 1
    ERROR = -1


class ArgumentParser:
    """
    Declaration, parsing and typed retrieval for one command line.

    Parameters
    - prog: Unset | str
      Program name shown in usage and diagnostics (defaults to the basename
      of sys.argv[0]).
    - description / epilog: Unset | str
      Paragraphs printed before / after the argument groups in help.
    - colorful: bool
      Apply the palette (see __styles__ in __main__) to help and diagnostics.
    - fancy: bool
      Wrap help and diagnostics in rich panels.
    - stdout / stderr: Unset | rich.console.Console
      Consoles for help output and diagnostics (capture them in tests).
    """
    prog = mirror("prog")
    description = mirror("description")
    epilog = mirror("epilog")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    registry = mirror("registry")
    store = mirror("store")
    stdout = mirror("stdout")
    stderr = mirror("stderr")

    def __init__(
            self,
            prog=Unset,
            description=Unset,
            epilog=Unset,
            *,
            colorful=True,
            fancy=False,
            stdout=Unset,
            stderr=Unset,
    ):
        for name, object in (("prog", prog), ("description", description), ("epilog", epilog)):
            if not isinstance(object, str | Unset):
                raise TypeError(f"argument-parser {name!r} must be a string")
        for name, object in (("stdout", stdout), ("stderr", stderr)):
            if not isinstance(object, Console | Unset):
                raise TypeError(f"argument-parser {name!r} must be a rich console")

        self._prog = coalesce(prog, os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "prog")
        self._description = coalesce(description, "")
        self._epilog = coalesce(epilog, "")
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._stdout = coalesce(stdout, Console())
        self._stderr = coalesce(stderr, Console(stderr=True))
        self._registry = Registry()
        self._store = ValueStore()

    def add_argument(
            self,
            aliases,
            help="",
            type=ArgumentType.STR,
            default="",
            required=False,
            key=Unset,
            choices=(),
            metavar=Unset,
            nargs=Unset,
    ):
        """
        Declare an argument and return its spec.

        Parameters
        - aliases: str | Sequence[str]
          "-v"/"--verbose" style names (optional argument) or one bare name
          (positional argument); mixing both raises ValueError.
        - help: str
        - type: ArgumentType | "bool" | "int" | "float" | "str" | bool | int | float | str
        - default: str | Iterable[str]
          Raw default applied when the argument is absent; converted now.
          The empty string (the default) declares no default.
        - required: bool
        - key: Unset | str
          Storage key override (otherwise derived from the longest alias).
        - choices: Iterable[str]
          Allowed raw values (empty = unrestricted).
        - metavar: Unset | str
        - nargs: Unset | "" | "?" | "*" | "+" | "<n>" | int

        Raises
        - InvalidNargsSpecificationError, DuplicateKeyError
        - TypeError / ValueError for malformed metadata or defaults
        """
        return self._registry.register(ArgumentSpec(
            aliases,
            help=help,
            type=type,
            default=default,
            required=required,
            key=key,
            choices=choices,
            metavar=metavar,
            nargs=nargs,
        ))

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's context.

        Parse errors are rendered on the error console; warnings go through
        the `warnings` module; anything else is raised.
        """
        if isinstance(fault, ParserWarning):
            options.setdefault("stacklevel", 5)
            options.setdefault("shell", False)
        elif isinstance(fault, ParseError):
            options.setdefault("shell", True)
        trigger(
            fault,
            **options,
            console=self._stderr,
            prog=self._prog,
            colorful=self._colorful,
            fancy=self._fancy,
        )

    @staticmethod
    def _tokenize(argv, /):
        if argv is Unset:
            argv = sys.argv
        elif isinstance(argv, str):
            argv = shlex.split(argv)
        elif isinstance(argv, Iterable):
            argv = list(argv)
            if not all(isinstance(token, str) for token in argv):
                raise TypeError("parse_args() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse_args() argument must be a string or an iterable of strings")
        return argv[1:]

    def parse_args(self, argv=Unset, /):
        """
        Parse argv (program name first) into a fresh value store.

        Parameters
        - argv:
          • Unset: sys.argv.
          • str: shell-like string, split with shlex.split.
          • Iterable[str]: pre-tokenized sequence.

        Returns
        - ParseStatus.SUCCESS: the store holds the parsed values.
        - ParseStatus.HELP: a help token was present; help was printed to stdout.
        - ParseStatus.ERROR: a diagnostic was printed to stderr; the store is empty.
        """
        tokens = self._tokenize(argv)
        scanner = Scanner(self._registry, tokens)

        try:
            scanner.scan()
        except ParseError as fault:
            # a help token anywhere wins over faults found before reaching it
            if not any(map(self._registry.is_help, tokens)):
                self._store = ValueStore()
                self.trigger(fault)
                return ParseStatus.ERROR
            scanner.help = True

        if scanner.help:
            self._store = ValueStore({HELP_KEY: Single(ArgumentType.BOOL, True)})
            self.print_help()
            return ParseStatus.HELP

        for warning in scanner.warnings:
            self.trigger(warning)

        self._store = ValueStore.build(self._registry, scanner.values)
        return ParseStatus.SUCCESS

    def print_help(self, console=Unset, /):
        console = coalesce(console, self._stdout)
        console.print(render_help(self, console.width - 4 * self._fancy))

    def format_help(self, width=80, /):
        """
        Return the help text as a plain string (no color codes).
        """
        console = Console(file=io.StringIO(), width=width, color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(render_help(self, width - 4 * self._fancy))
        return capture.get()

    def get(self, key, type=Unset, /):
        return self._store.get(key, type)

    def get_list(self, key, type=Unset, /):
        return self._store.get_list(key, type)

    def get_with_default(self, key, fallback, type=Unset, /):
        return self._store.get_with_default(key, fallback, type)

    def has_argument(self, key, /):
        return self._store.has_argument(key)

    def get_all_keys(self):
        return self._store.get_all_keys()

    def __rich_repr__(self):
        yield "prog", self._prog
        yield "registry", self._registry
        yield "store", self._store

    def __repr__(self):
        return "argument-parser(prog=%r, keys=%r)" % (self._prog, list(self._registry.keys))


__all__ = (
    "ParseStatus",
    "ArgumentParser",
)
