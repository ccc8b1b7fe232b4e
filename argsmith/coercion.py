"""
Type coercion and choice validation for captured tokens.

Rules
- BOOL: one of the literals in BOOLEANS (case-insensitive). Optional BOOL
  flags never reach this module, their presence alone means True.
- INT: fullmatch of INTEGER and within [INT_MIN, INT_MAX].
- FLOAT: fullmatch of DECIMAL; inf/nan spellings are rejected.
- STR: verbatim.

Choices are compared on the raw token string, before conversion, so a spec
declared with choices {"1", "2"} and type INT accepts "2" but not "02".
"""
import re

from .faults import TypeConversionError, InvalidChoiceError, FaultCode, getdoc
from .utils import Unset, ordinal
from .values import ArgumentType

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

INTEGER = re.compile(r"-?[0-9]+")
DECIMAL = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")

BOOLEANS = {
    "true": True,
    "yes": True,
    "on": True,
    "1": True,
    "false": False,
    "no": False,
    "off": False,
    "0": False,
}


def convert(type, token, /):
    """
    Convert one raw token to the scalar for `type`.

    Raises ValueError with a short reason; callers wrap it into the fault
    that fits their phase (TypeConversionError while parsing, ValueError
    for bad defaults at registration).
    """
    match ArgumentType.resolve(type):
        case ArgumentType.STR:
            return token
        case ArgumentType.BOOL:
            try:
                return BOOLEANS[token.lower()]
            except KeyError:
                raise ValueError("expected one of %s" % ", ".join(BOOLEANS)) from None
        case ArgumentType.INT:
            if not INTEGER.fullmatch(token):
                raise ValueError("expected a base-10 integer")
            if not INT_MIN <= (number := int(token)) <= INT_MAX:
                raise ValueError("out of range [%d, %d]" % (INT_MIN, INT_MAX))
            return number
        case ArgumentType.FLOAT:
            if not DECIMAL.fullmatch(token):
                raise ValueError("expected a decimal number")
            return float(token)


def check_choice(spec, token, /, *, input=Unset, index=Unset):
    """
    Raise InvalidChoiceError when `token` is outside the argument's choices.

    An empty choice set means unrestricted.
    """
    if not spec.choices or token in spec.choices:
        return
    raise InvalidChoiceError(
        "invalid choice %r for %s%s" % (token, _describe(spec, input), _where(index)),
        token=token,
        index=index,
        spec=spec,
        hint="choose from %s" % ", ".join(map(repr, spec.choices)),
        docs=getdoc(FaultCode.INVALID_CHOICE),
    )


def coerce(spec, token, /, *, input=Unset, index=Unset):
    """
    Validate the choice set, then convert `token` to the argument's type.
    """
    check_choice(spec, token, input=input, index=index)
    try:
        return convert(spec.type, token)
    except ValueError as exception:
        raise TypeConversionError(
            "invalid %s value %r for %s%s" % (spec.type, token, _describe(spec, input), _where(index)),
            token=token,
            index=index,
            spec=spec,
            reason=str(exception),
            hint=str(exception),
            docs=getdoc(FaultCode.TYPE_CONVERSION),
        ) from None


def coerce_all(spec, tokens, /, *, input=Unset, start=Unset):
    """
    Coerce a run of tokens; `start` is the 1-based position of the first one.
    """
    return [
        coerce(spec, token, input=input, index=Unset if start is Unset else start + offset)
        for offset, token in enumerate(tokens)
    ]


def _describe(spec, input):
    if input is not Unset:
        return repr(input)
    return "positional %r" % spec.display


def _where(index):
    return "" if index is Unset else " at %s position" % ordinal(index)


__all__ = (
    "INT_MIN",
    "INT_MAX",
    "BOOLEANS",
    "convert",
    "check_choice",
    "coerce",
    "coerce_all",
)
