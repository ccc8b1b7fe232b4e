"""
Token scanner and matcher.

One left-to-right pass over the tokens (program name already stripped) with a
cursor, the alias index of the registry, the queue of unfilled positionals and
a per-key buffer of parsed values.

Per token
1. "-h" / "--help": stop scanning and flag help (nothing else is validated).
2. an exact optional alias: consume that spec's values according to its nargs.
3. option-looking (starts with '-' and is not a negative number) but unknown:
   UnknownArgumentError.
4. anything else: goes to the next unfilled positional; none left is an
   UnknownArgumentError.

Value tokens
- a value token is any token that does not look like an option. Negative
  numbers ("-3", "-0.5", "-.5") are always value tokens, so greedy runs such
  as `--deltas -1.5 2.0 -3.5` keep all three.

After the pass, required specs without a value raise
MissingRequiredArgumentError. The first failure aborts the scan.
"""
import re
from collections import deque

from .coercion import coerce, coerce_all
from .faults import (
    UnknownArgumentError,
    MissingValueError,
    MissingRequiredArgumentError,
    RepeatedArgumentWarning,
    FaultCode,
    getdoc,
)
from .nargs import ExactlyOne, Optional, ZeroOrMore, OneOrMore, ExactlyN
from .utils import Unset, ordinal
from .values import ArgumentType, Single, Multiple

NEGATIVE_NUMBER = re.compile(r"-[0-9.]")


def is_negative_number(token, /):
    """
    '-' immediately followed by a digit or a decimal point.
    """
    return NEGATIVE_NUMBER.match(token) is not None


def looks_like_option(token, /):
    return token.startswith("-") and not is_negative_number(token)


def _label(spec, input):
    if input is Unset:
        return "positional %r" % spec.display
    return "option %r" % input


class Scanner:
    """
    Single-use matcher of a token sequence against a registry.

    Attributes (after scan())
    - help: True when a help token stopped the scan.
    - values: key → Value for every spec that received tokens.
    - warnings: non-fatal findings (repeated options), in order.
    """

    def __init__(self, registry, tokens, /):
        self._registry = registry
        self._tokens = deque(tokens)
        self._pending = deque(registry.positionals)
        self._index = 0
        self.help = False
        self.values = {}
        self.warnings = []

    def _peekable(self):
        return bool(self._tokens) and not looks_like_option(self._tokens[0])

    def _take(self):
        self._index += 1
        return self._tokens.popleft()

    def _restore(self, token):
        self._index -= 1
        self._tokens.appendleft(token)

    def scan(self):
        while self._tokens:
            token = self._take()

            if self._registry.is_help(token):
                self.help = True
                return self.values

            if (spec := self._registry.lookup(token)) is not None:
                if spec.key in self.values:
                    self.warnings.append(RepeatedArgumentWarning(
                        "option %r at %s position was already provided, the last occurrence wins"
                        % (token, ordinal(self._index)),
                        input=token,
                        index=self._index,
                        spec=spec,
                        hint="keep a single %r" % token,
                        docs=getdoc(FaultCode.REPEATED_ARGUMENT),
                    ))
                self.values[spec.key] = self._consume(spec, token)
                continue

            if looks_like_option(token):
                raise UnknownArgumentError(
                    "unknown option %r at %s position" % (token, ordinal(self._index)),
                    token=token,
                    index=self._index,
                    hint="run with --help to see the available options",
                    docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
                )

            try:
                spec = self._pending.popleft()
            except IndexError:
                raise UnknownArgumentError(
                    "unexpected positional argument %r at %s position" % (token, ordinal(self._index)),
                    token=token,
                    index=self._index,
                    hint="remove this extra value or run with --help to see the expected usage",
                    docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
                ) from None

            # hand the token back so the positional consumes it with its peers
            self._restore(token)
            self.values[spec.key] = self._consume(spec, Unset)

        self._check_required()
        return self.values

    def _consume(self, spec, input, /):
        """
        Read the values of `spec` right after the cursor and convert them.

        `input` is the alias that matched (Unset for positionals).
        """
        start = self._index
        tokens = []

        match spec.nargs:
            case ExactlyOne() if spec.flag:
                return Single(ArgumentType.BOOL, True)
            case ExactlyOne():
                if not self._peekable():
                    raise self._missing(spec, input, start, "requires a value")
                token = self._take()
                return Single(spec.type, coerce(spec, token, input=input, index=self._index))
            case Optional():
                if self._peekable():
                    tokens.append(self._take())
            case ZeroOrMore() | OneOrMore():
                while self._peekable():
                    tokens.append(self._take())
            case ExactlyN(count):
                while len(tokens) < count and self._peekable():
                    tokens.append(self._take())

        if not spec.nargs.accepts(len(tokens)):
            match spec.nargs:
                case ExactlyN(count):
                    reason = "requires %d values but got %d" % (count, len(tokens))
                case _:
                    reason = "requires at least one value"
            raise self._missing(spec, input, start, reason)

        return Multiple(spec.type, coerce_all(spec, tokens, input=input, start=start + 1))

    def _missing(self, spec, input, start, reason, /):
        # options are reported at their alias, positionals at their first value
        where = start if input is not Unset else start + 1
        return MissingValueError(
            "%s at %s position %s" % (_label(spec, input), ordinal(where), reason),
            input=input,
            index=where,
            spec=spec,
            hint="add %s after %s" % (
                spec.display if spec.nargs.maximum == 1 else "%s values" % spec.display,
                input if input is not Unset else "the previous argument",
            ),
            docs=getdoc(FaultCode.MISSING_VALUE),
        )

    def _check_required(self):
        for spec in self._registry:
            if not spec.required or spec.key in self.values:
                continue
            if spec.positional:
                name = usage = spec.display
            else:
                name = usage = max(spec.aliases, key=len)
                if not spec.flag:
                    usage = "%s %s" % (name, spec.display)
            raise MissingRequiredArgumentError(
                "missing required %s %r" % ("positional" if spec.positional else "option", name),
                spec=spec,
                hint="add %s to the command line" % usage,
                docs=getdoc(FaultCode.MISSING_REQUIRED_ARGUMENT),
            )


__all__ = (
    "NEGATIVE_NUMBER",
    "is_negative_number",
    "looks_like_option",
    "Scanner",
)
