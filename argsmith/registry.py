"""
Argument specification registry.

Holds the declared specs of one parser:
- positionals: ordered list, consumed by scan order.
- optionals: alias → spec index for O(1) lookup while scanning.
- keys: key → spec, enforcing key uniqueness (including the reserved "help").

A synthetic optional BOOL spec (-h/--help, key "help") is registered first and
cannot be redeclared; its aliases are reserved as well.

The registry is only mutated during setup (register); the scanner reads it.
"""
from .arguments import ArgumentSpec
from .faults import DuplicateKeyError, FaultCode, getdoc
from .utils import mirror
from .values import ArgumentType

HELP_KEY = "help"
HELP_ALIASES = ("-h", "--help")


class Registry:
    """
    Declared specs, indexed for the scanner.

    Properties
    - positionals: tuple of positional specs in declaration order.
    - optionals: read-only alias → spec mapping.
    - keys: read-only key → spec mapping (declaration order).
    """
    positionals = mirror("positionals")
    optionals = mirror("optionals")
    keys = mirror("keys")

    def __init__(self):
        self._positionals = []
        self._optionals = {}
        self._keys = {}
        self.register(ArgumentSpec(HELP_ALIASES, "show this help message and exit", ArgumentType.BOOL))

    def register(self, spec, /):
        """
        Add a spec; key and alias collisions raise DuplicateKeyError.
        """
        if not isinstance(spec, ArgumentSpec):
            raise TypeError("register() argument must be an argument spec")

        if (key := spec.key) in self._keys:
            raise DuplicateKeyError(
                "key %r is already in use" % key,
                key=key,
                spec=spec,
                hint="reserved keys: %r" % HELP_KEY if key == HELP_KEY else "pass a different 'key' override",
                docs=getdoc(FaultCode.DUPLICATE_KEY),
            )

        if not spec.positional:
            for alias in spec.aliases:
                if (other := self._optionals.get(alias)) is not None:
                    raise DuplicateKeyError(
                        "alias %r is already bound to key %r" % (alias, other.key),
                        key=key,
                        alias=alias,
                        spec=spec,
                        hint="remove %r from the aliases" % alias,
                        docs=getdoc(FaultCode.DUPLICATE_KEY),
                    )
            self._optionals.update(dict.fromkeys(spec.aliases, spec))
        else:
            self._positionals.append(spec)

        self._keys[key] = spec
        return spec

    def lookup(self, alias, /):
        """
        Return the optional spec bound to `alias`, or None.
        """
        return self._optionals.get(alias)

    @staticmethod
    def is_help(token, /):
        return token in HELP_ALIASES

    def __iter__(self):
        return iter(self._keys.values())

    def __len__(self):
        return len(self._keys)

    def __contains__(self, key):
        return key in self._keys

    def __rich_repr__(self):
        yield "keys", list(self._keys)


__all__ = (
    "HELP_KEY",
    "HELP_ALIASES",
    "Registry",
)
