"""
Argsmith cardinality model.

A closed vocabulary for how many tokens an argument consumes:

    marker        variant          stored as
    ""  / "1"     ExactlyOne       single scalar
    "?"           Optional         list (0 or 1 item)
    "*"           ZeroOrMore       list (0..n items)
    "+"           OneOrMore        list (1..n items)
    "<n>"         ExactlyN(n)      list (exactly n items)

Markers are parsed once, at registration, by Nargs.parse(); anything else is an
InvalidNargsSpecificationError raised to the caller of add_argument. The scanner
then dispatches with `match` over the variants instead of comparing strings.

Quick example:
    >>> Nargs.parse("+")
    OneOrMore()
    >>> Nargs.parse("3")
    ExactlyN(3)
    >>> Nargs.parse("") is ExactlyOne()
    True
"""
import functools
import re

from .faults import InvalidNargsSpecificationError, FaultCode, getdoc
from .utils import Unset

COUNT_MAX = 2 ** 32 - 1


class Nargs:
    """
    Base of the cardinality variants.

    Attributes
    - marker: the canonical marker string ("", "?", "*", "+", "<n>").
    - multiple: whether the parsed values are stored as a list.
    - minimum: the least number of values that satisfies the rule.
    - maximum: the largest number of values the rule consumes (None = unbounded).
    """
    __slots__ = ()
    __match_args__ = ()

    marker = Unset
    multiple = True
    minimum = 0
    maximum = None

    def __init_subclass__(cls, **options):
        # only the variants declared in this module are allowed
        if cls.__module__ != __name__:
            raise TypeError(f"type {cls.__name__!r} is not an acceptable base type")
        super().__init_subclass__(**options)

    @staticmethod
    def parse(marker, /):
        """
        Build a variant from a free-form marker.

        Accepted
        - Unset, "" or "1" (and the int 1) → ExactlyOne
        - "?" → Optional, "*" → ZeroOrMore, "+" → OneOrMore
        - a non-negative base-10 integer (str or int) → ExactlyN(n)
        - an existing Nargs variant is returned as-is

        Raises
        - InvalidNargsSpecificationError for anything else.
        """
        if isinstance(marker, Nargs):
            return marker
        if marker is Unset:
            return ExactlyOne()
        if isinstance(marker, int) and not isinstance(marker, bool):
            marker = str(marker)
        if not isinstance(marker, str):
            raise InvalidNargsSpecificationError(
                "nargs must be a string or an integer, not %s" % type(marker).__name__,
                marker=marker,
                hint="use one of '?', '*', '+' or a non-negative integer",
                docs=getdoc(FaultCode.INVALID_NARGS),
            )

        match marker:
            case "" | "1":
                return ExactlyOne()
            case "?":
                return Optional()
            case "*":
                return ZeroOrMore()
            case "+":
                return OneOrMore()
            case digits if re.fullmatch(r"[0-9]+", digits):
                return ExactlyOne() if int(digits) == 1 else ExactlyN(int(digits))

        raise InvalidNargsSpecificationError(
            "invalid nargs specification %r" % marker,
            marker=marker,
            hint="use one of '?', '*', '+' or a non-negative integer",
            docs=getdoc(FaultCode.INVALID_NARGS),
        )

    def accepts(self, count, /):
        """
        Whether `count` collected values satisfy this rule.
        """
        return count >= self.minimum and (self.maximum is None or count <= self.maximum)

    def __repr__(self):
        return f"{type(self).__name__}()"

    def __reduce__(self):
        return type(self), ()


class _Nullary(Nargs):
    """
    Variants without payload are process-wide singletons.
    """
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)


class ExactlyOne(_Nullary):
    __slots__ = ()
    marker = ""
    multiple = False
    minimum = 1
    maximum = 1


class Optional(_Nullary):
    __slots__ = ()
    marker = "?"
    maximum = 1


class ZeroOrMore(_Nullary):
    __slots__ = ()
    marker = "*"


class OneOrMore(_Nullary):
    __slots__ = ()
    marker = "+"
    minimum = 1


class ExactlyN(Nargs):
    """
    Exactly `count` values (0 <= count <= COUNT_MAX; ExactlyN(1) is spelled ExactlyOne).
    """
    __slots__ = ("_count",)
    __match_args__ = ("count",)

    def __init__(self, count, /):
        if not isinstance(count, int) or isinstance(count, bool):
            raise TypeError("ExactlyN() argument must be an integer")
        if count < 0:
            raise InvalidNargsSpecificationError(
                "nargs count cannot be negative (got %d)" % count,
                marker=count,
                hint="use a non-negative integer",
            )
        if count > COUNT_MAX:
            raise InvalidNargsSpecificationError(
                "nargs count cannot exceed %d (got %d)" % (COUNT_MAX, count),
                marker=count,
                hint="use an integer between 0 and %d" % COUNT_MAX,
                docs=getdoc(FaultCode.INVALID_NARGS),
            )
        self._count = count

    @property
    def count(self):
        return self._count

    @property
    def marker(self):
        return str(self._count)

    @property
    def minimum(self):
        return self._count

    @property
    def maximum(self):
        return self._count

    def __eq__(self, other):
        if not isinstance(other, ExactlyN):
            return NotImplemented
        return self._count == other._count

    def __hash__(self):
        return hash((ExactlyN, self._count))

    def __repr__(self):
        return f"ExactlyN({self._count})"

    def __reduce__(self):
        return ExactlyN, (self._count,)


__all__ = (
    "COUNT_MAX",
    "Nargs",
    "ExactlyOne",
    "Optional",
    "ZeroOrMore",
    "OneOrMore",
    "ExactlyN",
)
