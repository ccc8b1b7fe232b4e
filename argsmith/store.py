"""
Typed value store and query API.

A ValueStore is built once per parse and is read-only afterwards. Keys follow
declaration order (the reserved "help" key first).

Insertion policy on a successful parse
- every spec that received tokens;
- every other spec that declares a default (the default is used);
- every optional BOOL flag without a default, stored as False;
- every "?" / "*" spec without a default, stored as an empty list;
- "help" (False unless a help token stopped the parse).

Retrieval
- get(key, type)            → scalar        (Single variant)
- get_list(key, type)       → list          (Multiple variant)
- get_with_default(key, fallback, type)     never raises
- has_argument(key), get_all_keys()

The typed getters raise UnknownKeyError for absent keys and TypeMismatchError
naming both the requested and the stored type when the variant or the type
tag differs. Passing no type accepts any scalar type for the variant asked for.
"""
from types import MappingProxyType

from .faults import UnknownKeyError, TypeMismatchError, FaultCode, getdoc
from .utils import Unset, coalesce
from .values import ArgumentType, Single, Multiple, typename


class ValueStore:
    """
    Read-only key → Value mapping with typed getters.
    """
    __slots__ = ("_values",)

    def __init__(self, values=(), /):
        self._values = MappingProxyType(dict(values))

    @classmethod
    def build(cls, registry, values, /):
        """
        Compose the store of a successful parse from the scanned values.
        """
        composed = {}
        for spec in registry:
            if spec.key in values:
                composed[spec.key] = values[spec.key]
            elif spec.preset is not Unset:
                composed[spec.key] = spec.preset
            elif spec.flag:
                composed[spec.key] = Single(ArgumentType.BOOL, False)
            elif spec.nargs.multiple and spec.nargs.minimum == 0:
                composed[spec.key] = Multiple(spec.type)
        return cls(composed)

    def _lookup(self, key, /):
        try:
            return self._values[key]
        except KeyError:
            raise UnknownKeyError(
                "unknown key %r" % key,
                key=key,
                hint="known keys: %s" % (", ".join(map(repr, self._values)) or "none"),
                docs=getdoc(FaultCode.UNKNOWN_KEY),
            ) from None

    @staticmethod
    def _mismatch(key, requested, value, /):
        return TypeMismatchError(
            "type mismatch for key %r: requested %s but stored %s" % (key, requested, value.typename),
            key=key,
            requested=requested,
            stored=value.typename,
            hint="use the getter that matches the declared type and nargs",
            docs=getdoc(FaultCode.TYPE_MISMATCH),
        )

    def get(self, key, type=Unset, /):
        """
        Return the scalar stored under `key`.

        Raises UnknownKeyError or TypeMismatchError.
        """
        value = self._lookup(key)
        expected = Unset if type is Unset else ArgumentType.resolve(type)
        match value:
            case Single(kind, object) if expected is Unset or kind is expected:
                return object
            case _:
                raise self._mismatch(key, typename(coalesce_type(expected, value)), value)

    def get_list(self, key, type=Unset, /):
        """
        Return the list stored under `key` (possibly empty).

        Raises UnknownKeyError or TypeMismatchError.
        """
        value = self._lookup(key)
        expected = Unset if type is Unset else ArgumentType.resolve(type)
        match value:
            case Multiple(kind, objects) if expected is Unset or kind is expected:
                return list(objects)
            case _:
                raise self._mismatch(key, typename(coalesce_type(expected, value), multiple=True), value)

    def get_with_default(self, key, fallback, type=Unset, /):
        """
        Like get()/get_list(), but return `fallback` when the key is absent or
        the stored value does not match. A list fallback selects get_list().

        Without an explicit `type`, the type of the fallback (or of its first
        item) is the one requested.
        """
        getter = self.get_list if isinstance(fallback, list | tuple) else self.get
        try:
            return getter(key, coalesce(type, infer_type(fallback)))
        except (UnknownKeyError, TypeMismatchError):
            return fallback

    def has_argument(self, key, /):
        return key in self._values

    def get_all_keys(self):
        return list(self._values)

    def __contains__(self, key):
        return key in self._values

    def __getitem__(self, key):
        return self._lookup(key)

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, ValueStore):
            return NotImplemented
        return dict(self._values) == dict(other._values)

    __hash__ = None

    def __repr__(self):
        return "value-store(%s)" % ", ".join("%s=%r" % item for item in self._values.items())

    def __rich_repr__(self):
        yield from self._values.items()


def coalesce_type(expected, value, /):
    """
    The type named in a mismatch message: the requested one, or the stored
    tag when the caller did not ask for a specific type.
    """
    return value.type if expected is Unset else expected


def infer_type(fallback, /):
    """
    The ArgumentType matching a fallback scalar (or the first item of a list
    fallback); Unset when nothing matches.
    """
    if isinstance(fallback, list | tuple):
        if not fallback:
            return Unset
        fallback = fallback[0]
    # bool before int, True is an int too
    for member in (ArgumentType.BOOL, ArgumentType.INT, ArgumentType.FLOAT, ArgumentType.STR):
        if isinstance(fallback, member.pytype):
            return member
    return Unset


__all__ = (
    "ValueStore",
)
