r"""
Argsmith argument specifications.

Overview
- ArgumentSpec: one declared argument (positional or optional) with aliases,
  help, scalar type, default, required flag, key, choices, metavar and nargs.
- Kind: POSITIONAL (no alias starts with '-') or OPTIONAL (every alias starts
  with '-'), computed once at construction.
- derive_key(aliases): canonical key from the longest alias.

- Introspection & representation
  • SpecType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties (see mirror()).

Metadata (sanitized on construction)
- aliases: non-empty sequence of non-empty strings without whitespace; all
  dashed or all bare; duplicates rejected. A bare string is one alias.
- help: str | Text, may be empty.
- type: ArgumentType | "int" | int (see ArgumentType.resolve).
- nargs: parsed by Nargs.parse (raises InvalidNargsSpecificationError).
- key: Unset | non-empty str (override); otherwise derived from the aliases.
- choices: iterable of raw strings (non-strings are str()-ed); duplicates
  rejected unless a Set.
- metavar: Unset | non-empty str.
- default: "" (no default) | str | iterable of str (multi-valued specs). Converted once
  here; a default the type cannot represent raises ValueError.

Quick example:
    >>> spec = ArgumentSpec(["-o", "--output-file"], type="str")
    >>> spec.key, spec.kind
    ('output_file', <Kind.OPTIONAL: 'optional'>)
"""
import builtins
import functools
import operator
import re
from collections.abc import Iterable, Set
from enum import Enum

from rich.text import Text

from .coercion import convert
from .nargs import Nargs, ExactlyOne
from .utils import *
from .values import ArgumentType, Single, Multiple


class Kind(Enum):
    POSITIONAL = "positional"
    OPTIONAL = "optional"


def derive_key(aliases, /):
    """
    Canonical key from the longest alias (the first one wins on ties).

    Leading dashes are stripped; '-', '.' and whitespace become '_'.

        ["-o", "--output-file"] -> "output_file"
        ["input"]               -> "input"
    """
    longest = max(aliases, key=len)
    return re.sub(r"[-.\s]", "_", longest.lstrip("-"))


class SpecType(type):
    """
    Metaclass that turns spec classes into introspectable records.

    Responsibilities
    - Expose the names listed in __introspectable__ as read-only properties
      backed by "_{name}" attributes (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens) and used in messages.
    - __displayable__ (if set) narrows which properties __rich_repr__ shows.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_aliases(cls, metadata, /):
    """
    Internal: validate aliases and classify the spec.

    Raises
    - TypeError: aliases missing or not strings.
    - ValueError: empty/whitespace aliases, duplicates, or mixed dash-ness.
    """
    aliases = metadata["aliases"]
    if isinstance(aliases, str):
        aliases = (aliases,)
    if not isinstance(aliases, Iterable) or not (aliases := tuple(aliases)):
        raise TypeError(f"{cls.__typename__} must specify at least one alias")

    sanitized = []
    for alias in aliases:
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} aliases must be strings")
        elif not (alias := alias.strip()):
            raise ValueError(f"{cls.__typename__} aliases cannot be empty-strings")
        elif re.search(r"\s", alias):
            raise ValueError(f"{cls.__typename__} alias {alias!r} cannot contain whitespace")
        elif not alias.lstrip("-"):
            raise ValueError(f"{cls.__typename__} alias {alias!r} must contain a name after its dashes")
        elif alias in sanitized:
            raise ValueError(f"{cls.__typename__} aliases cannot contain duplicates")
        sanitized.append(alias)

    dashed = {alias.startswith("-") for alias in sanitized}
    if len(dashed) > 1:
        raise ValueError(
            f"{cls.__typename__} aliases must either all start with '-' (optional) or none (positional), "
            f"got {sanitized!r}"
        )

    metadata["aliases"] = tuple(sanitized)
    metadata["kind"] = Kind.OPTIONAL if dashed.pop() else Kind.POSITIONAL


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize help/type/required/key/metavar/choices/nargs.
    """
    if not isinstance(help := metadata["help"], str | Text):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    metadata["help"] = help.strip() if isinstance(help, str) else help

    metadata["type"] = ArgumentType.resolve(metadata["type"])
    metadata["required"] = bool(metadata["required"])
    metadata["nargs"] = Nargs.parse(metadata["nargs"])

    if not isinstance(key := metadata["key"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'key' must be a string")
    elif isinstance(key, str) and not (key := key.strip()):
        raise ValueError(f"{cls.__typename__} 'key' cannot be empty")
    metadata["key"] = coalesce(key, derive_key(metadata["aliases"]))

    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = coalesce(metavar)

    if isinstance(choices := metadata["choices"], str) or not isinstance(choices, Iterable):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
    sanitized = []
    for choice in map(str, choices):
        if choice in sanitized:
            if isinstance(choices, Set):
                continue
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)
    metadata["choices"] = tuple(sanitized)


def _sanitize_default(cls, metadata, /):
    """
    Internal: convert the raw default into the Value stored when absent.

    Single-valued specs take one raw string; multi-valued specs take a string
    (one item) or an iterable of strings. The empty string means no default.
    """
    default, type, nargs = metadata["default"], metadata["type"], metadata["nargs"]
    if default is Unset or default == "":
        metadata["default"] = metadata["preset"] = Unset
        return

    if nargs.multiple:
        raw = (default,) if isinstance(default, str) else default
        if not isinstance(raw, Iterable):
            raise TypeError(f"{cls.__typename__} 'default' must be a string or an iterable of strings")
        raw = tuple(raw)
        if not all(isinstance(item, str) for item in raw):
            raise TypeError(f"{cls.__typename__} 'default' must be a string or an iterable of strings")
    elif not isinstance(default, str):
        raise TypeError(f"{cls.__typename__} 'default' must be a string")
    else:
        raw = (default,)

    try:
        objects = [convert(type, item) for item in raw]
    except ValueError as exception:
        raise ValueError(
            f"{cls.__typename__} {metadata['key']!r} default {default!r} is not a valid {type}: {exception}"
        ) from None

    metadata["default"] = raw if nargs.multiple else default
    metadata["preset"] = Multiple(type, objects) if nargs.multiple else Single(type, objects[0])


class ArgumentSpec(metaclass=SpecType):
    """
    One declared argument.

    Properties
    - The names listed in __introspectable__ are exposed as read-only
      attributes mirroring the sanitized metadata.
    - display: the label used in help and messages (metavar, else the first
      alias for positionals, else the upper-cased key).
    - flag: True for optional BOOL specs with ExactlyOne nargs; their presence
      alone sets the value and they consume no token.
    - preset: the Value stored when the spec is absent (Unset when no default).
    """

    __introspectable__ = (
        "aliases",
        "kind",
        "key",
        "help",
        "type",
        "default",
        "required",
        "choices",
        "metavar",
        "nargs",
    )

    __displayable__ = (
        "aliases",
        "key",
        "type",
        "nargs",
        "required",
    )

    def __init__(
            self,
            aliases,
            /,
            help="",
            type=ArgumentType.STR,
            default="",
            required=False,
            key=Unset,
            choices=(),
            metavar=Unset,
            nargs=Unset,
    ):
        metadata = {
            "aliases": aliases,
            "help": help,
            "type": type,
            "default": default,
            "required": required,
            "key": key,
            "choices": choices,
            "metavar": metavar,
            "nargs": nargs,
        }
        cls = builtins.type(self)
        _sanitize_aliases(cls, metadata)
        _sanitize_metadata(cls, metadata)
        _sanitize_default(cls, metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def positional(self):
        return self._kind is Kind.POSITIONAL

    @property
    def flag(self):
        return (
            self._kind is Kind.OPTIONAL
            and self._type is ArgumentType.BOOL
            and self._nargs is ExactlyOne()
        )

    @property
    def preset(self):
        return self._preset

    @property
    def display(self):
        if self._metavar is not None:
            return self._metavar
        if self._kind is Kind.POSITIONAL:
            return self._aliases[0]
        return self._key.upper()


__all__ = (
    "Kind",
    "ArgumentSpec",
    "derive_key",
)
