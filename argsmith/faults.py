"""
Argsmith faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by the phase that detects them so logs and searches stay
  predictable.
- ArgumentException / ParserWarning: base types that carry message + options
  and know how to render themselves as rich renderables.
- trigger(): central entry point to surface a fault with runtime context.
- getdoc(): optional description lookup for a code from the host application.

Error channels
- registration-time (raised synchronously from add_argument):
  • InvalidNargsSpecificationError, DuplicateKeyError
- parse-time (absorbed by parse_args, rendered to the error console):
  • UnknownArgumentError, MissingValueError, MissingRequiredArgumentError,
    InvalidChoiceError, TypeConversionError
- retrieval-time (raised from the typed getters):
  • UnknownKeyError, TypeMismatchError

UX goals
- Position-first messages: parse faults name the ordinal position of the
  offending token ("at third position").
- Short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).
"""
import inspect
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - registration (101xx)
      • INVALID_NARGS, DUPLICATE_KEY
    - parsing (111xx)
      • UNKNOWN_ARGUMENT, MISSING_VALUE, MISSING_REQUIRED_ARGUMENT,
        INVALID_CHOICE, TYPE_CONVERSION
    - warnings (121xx)
      • REPEATED_ARGUMENT
    - retrieval (131xx)
      • UNKNOWN_KEY, TYPE_MISMATCH
    """
    # --- registration errors ---
    INVALID_NARGS               = 10101
    DUPLICATE_KEY               = 10102

    # --- parse errors ---
    UNKNOWN_ARGUMENT            = 11111
    MISSING_VALUE               = 11112
    MISSING_REQUIRED_ARGUMENT   = 11113
    INVALID_CHOICE              = 11114
    TYPE_CONVERSION             = 11115

    # --- warnings ---
    REPEATED_ARGUMENT           = 12111

    # --- retrieval errors ---
    UNKNOWN_KEY                 = 13101
    TYPE_MISMATCH               = 13102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    build the rich renderable shared by exceptions and warnings.

    layout
    - header: "[ prog — code | title ]"
    - body: the message
    - hint: " → hint" (omitted when the fault has no hint)
    - docs: host-provided documentation for the code, when available
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    prog = text(getattr(main, "__prog__", options.get("prog", "")), "prog-name")
    code = options.get("code", fault.code)

    header = Text.assemble(
        "[ ",
        prog,
        " — " if prog else "",
        text(code.normalize(), "code"),
        " | ",
        text(options.get("title", fault.title).title(), "title"),
        " ]"
    )
    parts = [text(fault.message, "message")]
    if hint := options.get("hint"):
        parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
    if docs := options.get("docs", getdoc(code)):
        parts.append(text(docs, "docs"))

    if options.get("fancy", False):
        return Panel(Group(*parts), title=header, title_align="left")
    return Group(header, *parts)


class ArgumentException(Exception):
    """
    base type of every argsmith error.

    the message is positional-only; anything else (hint, title, token, index,
    spec, prog, colorful, fancy, ...) is stored in a read-only `options`
    mapping and merged by trigger() through __replace__.
    """
    code = Unset
    title = "argument error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
            "docs": "underline #00E5FF dim",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


# registration-time
class InvalidNargsSpecificationError(ArgumentException, ValueError):
    code = FaultCode.INVALID_NARGS
    title = "invalid nargs"

class DuplicateKeyError(ArgumentException, ValueError):
    code = FaultCode.DUPLICATE_KEY
    title = "duplicate key"


# parse-time
class ParseError(ArgumentException):
    title = "parse error"

class UnknownArgumentError(ParseError):
    code = FaultCode.UNKNOWN_ARGUMENT
    title = "unknown argument"

class MissingValueError(ParseError):
    code = FaultCode.MISSING_VALUE
    title = "missing value"

class MissingRequiredArgumentError(ParseError):
    code = FaultCode.MISSING_REQUIRED_ARGUMENT
    title = "missing required argument"

class InvalidChoiceError(ParseError):
    code = FaultCode.INVALID_CHOICE
    title = "invalid choice"

class TypeConversionError(ParseError):
    code = FaultCode.TYPE_CONVERSION
    title = "type conversion"


# retrieval-time
class UnknownKeyError(ArgumentException, KeyError):
    code = FaultCode.UNKNOWN_KEY
    title = "unknown key"

class TypeMismatchError(ArgumentException, TypeError):
    code = FaultCode.TYPE_MISMATCH
    title = "type mismatch"


class ParserWarning(Warning):
    """
    base type of non-fatal parse findings.

    outside shell mode the warning goes through the `warnings` module so
    hosts can filter or escalate it; in shell mode it is rendered.
    """
    code = Unset
    title = "warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
            "docs": "underline #FFB400 dim",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", len(inspect.stack())))
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RepeatedArgumentWarning(ParserWarning):
    code = FaultCode.REPEATED_ARGUMENT
    title = "repeated argument"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - shell=True renders on the given console (or the module stderr console);
      otherwise exceptions are raised and warnings go through `warnings.warn`.

    typical options
    - shell, console, prog, colorful, fancy, title, code, hint, docs, and any
      context the reporter wants to keep (token, index, spec, ...).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ArgumentException",
    "InvalidNargsSpecificationError",
    "DuplicateKeyError",
    "ParseError",
    "UnknownArgumentError",
    "MissingValueError",
    "MissingRequiredArgumentError",
    "InvalidChoiceError",
    "TypeConversionError",
    "UnknownKeyError",
    "TypeMismatchError",
    "ParserWarning",
    "RepeatedArgumentWarning",
    "trigger",
    "getdoc",
)
