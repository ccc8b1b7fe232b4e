"""
Argsmith value model.

- ArgumentType: closed set of scalar type tags (BOOL, INT, FLOAT, STR).
- Value: closed tagged union stored per key after a parse.
  • Single(type, object): one scalar.
  • Multiple(type, objects): an ordered tuple of scalars of one type.

Both variants support structural pattern matching, so retrieval code reads as

    match value:
        case Single(ArgumentType.INT, object):
            ...
        case Multiple(kind, objects):
            ...

and carries the type tag that the typed getters compare against.
"""
import builtins
from enum import Enum


class ArgumentType(Enum):
    """
    Scalar type tags.

    Each member knows its Python builtin (`pytype`) and the display name used
    in help output and mismatch messages.
    """
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"

    @property
    def pytype(self):
        return getattr(builtins, self.value)

    @classmethod
    def resolve(cls, object, /):
        """
        Accept a member, its name ("int"/"INT") or the builtin itself (int).
        """
        if isinstance(object, cls):
            return object
        if isinstance(object, str):
            try:
                return cls(object.strip().lower())
            except ValueError:
                raise ValueError(f"unknown argument type {object!r}") from None
        for member in cls:
            if object is member.pytype:
                return member
        raise TypeError(f"argument type must be one of bool, int, float, str (got {object!r})")

    def __str__(self):
        return self.value


class Value:
    """
    Base of the stored value variants (not instantiated directly).
    """
    __slots__ = ()

    def __init_subclass__(cls, **options):
        if cls.__module__ != __name__:
            raise TypeError(f"type {cls.__name__!r} is not an acceptable base type")
        super().__init_subclass__(**options)

    @property
    def typename(self):
        """
        Display name of the stored shape, e.g. "int" or "list[str]".
        """
        raise NotImplementedError


class Single(Value):
    __slots__ = ("_type", "_object")
    __match_args__ = ("type", "object")

    def __init__(self, type, object, /):
        self._type = ArgumentType.resolve(type)
        self._object = object

    type = property(lambda self: self._type)
    object = property(lambda self: self._object)

    @property
    def typename(self):
        return str(self._type)

    def __eq__(self, other):
        if not isinstance(other, Single):
            return NotImplemented
        return (self._type, self._object) == (other._type, other._object)

    def __hash__(self):
        return hash((Single, self._type, self._object))

    def __repr__(self):
        return f"Single({self._type.name}, {self._object!r})"

    def __rich_repr__(self):
        yield self._type.name
        yield self._object


class Multiple(Value):
    __slots__ = ("_type", "_objects")
    __match_args__ = ("type", "objects")

    def __init__(self, type, objects=(), /):
        self._type = ArgumentType.resolve(type)
        self._objects = tuple(objects)

    type = property(lambda self: self._type)
    objects = property(lambda self: self._objects)

    @property
    def typename(self):
        return f"list[{self._type}]"

    def __len__(self):
        return len(self._objects)

    def __eq__(self, other):
        if not isinstance(other, Multiple):
            return NotImplemented
        return (self._type, self._objects) == (other._type, other._objects)

    def __hash__(self):
        return hash((Multiple, self._type, self._objects))

    def __repr__(self):
        return f"Multiple({self._type.name}, {list(self._objects)!r})"

    def __rich_repr__(self):
        yield self._type.name
        yield list(self._objects)


def typename(type, /, *, multiple=False):
    """
    Display name for a requested shape ("float", "list[int]", ...).
    """
    name = str(ArgumentType.resolve(type))
    return f"list[{name}]" if multiple else name


__all__ = (
    "ArgumentType",
    "Value",
    "Single",
    "Multiple",
    "typename",
)
