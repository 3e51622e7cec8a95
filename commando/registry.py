"""
Commando option registry.

One command owns one registry: an arena (list) of Option records plus a flat
key map from every key (primary name, alias, positional index) to the arena
slot of its record. An aliased option is therefore stored once and reached
through several keys; iterating the registry yields each record once, in
declaration order.

Positional keys for anonymous declarations come from a counter that starts
at 0 and is never rewound.
"""
from .options import Option
from .utils import Unset, coalesce


class OptionRegistry:
    def __init__(self):
        self._arena = []
        self._keys = {}
        self._counter = 0

    def __contains__(self, key):
        return key in self._keys

    def __iter__(self):
        """Distinct options in declaration order."""
        return iter(list(self._arena))

    def __len__(self):
        """Number of registered keys, aliases included."""
        return len(self._keys)

    def keys(self):
        return list(self._keys)

    def allocate(self):
        """
        Reserve the next synthetic positional index.
        """
        while self._counter in self._keys:
            self._counter += 1
        index = self._counter
        self._counter += 1
        return index

    def add(self, option, /):
        """
        Register a new option under its primary name (and aliases, if it already has some).

        raises
        - ValueError when any of its keys already belongs to another option.
        """
        if not isinstance(option, Option):
            raise TypeError("registry can only hold options")
        for key in option.names:
            self._claim(key, option)

        self._arena.append(option)
        slot = len(self._arena) - 1
        for key in option.names:
            self._keys[key] = slot
        return option

    def alias(self, key, option, /):
        """
        Make an extra key resolve to an already registered option and record
        it in the option's alias set.
        """
        self._claim(key, option)
        slot = self._slot(option)
        option.add_alias(key)
        self._keys[key] = slot
        return option

    def get(self, key, default=Unset, /):
        """
        Resolve a key to its option.

        raises
        - KeyError when the key is unknown and no default was given.
        """
        try:
            return self._arena[self._keys[key]]
        except (KeyError, TypeError):
            if default is Unset:
                raise KeyError(key) from None
            return coalesce(default)

    def _slot(self, option):
        for slot, candidate in enumerate(self._arena):
            if candidate is option:
                return slot
        raise KeyError(option.name)

    def _claim(self, key, option):
        if key in self._keys and self._arena[self._keys[key]] is not option:
            raise ValueError("option key %r is already in use" % (key,))


__all__ = (
    "OptionRegistry",
)
