"""
Optnaut value store.

A Values instance is the result bag of one parse:
- the latest string value per destination (the Mapping interface),
- the ordered list of every value appended to a destination (append/append_const),
- the set of destinations explicitly touched by the user, as opposed to filled
  from a declared default once the scan is over.

Every stored value is text. Typed access lives outside the parse core, in
optnaut.convert (see Values.get_as).

Lifecycle
- created empty by OptionParser.parse() for every call (stores are never
  reused across parses), populated left to right while tokens are matched,
  then completed with defaults for destinations still unset.
- read-only for callers; the underscore mutators are reserved to the parser
  and to option callbacks that need to store custom results.
"""
from collections.abc import Mapping

from .convert import decode


class Values(Mapping):
    """
    read-only mapping dest -> latest value, plus append-lists and user-set marks.
    """

    def __init__(self):
        self._map = {}
        self._lists = {}
        self._user = set()

    def __getitem__(self, dest):
        return self._map[dest]

    def __iter__(self):
        return iter(self._map)

    def __len__(self):
        return len(self._map)

    def all(self, dest):
        """
        every value appended under dest, in order of appearance (empty tuple if none).
        """
        return tuple(self._lists.get(dest, ()))

    def is_set(self, dest):
        return dest in self._map

    def is_set_by_user(self, dest):
        return dest in self._user

    def get_as(self, dest, kind, default=None):
        """
        decode the stored value of dest as kind (bool/int/float/complex/str).

        returns default when dest is not set; raises ValueError when the stored
        text does not decode.
        """
        if dest not in self._map:
            return default
        return decode(self._map[dest], kind)

    def _store(self, dest, value):
        self._map[dest] = value
        self._user.add(dest)

    def _append(self, dest, value):
        self._store(dest, value)
        self._lists.setdefault(dest, []).append(value)

    def _fill(self, dest, value):
        """
        default-fill: only for destinations still unset, never marked user-set.
        """
        if dest not in self._map:
            self._map[dest] = value

    def __repr__(self):
        return "values(%r)" % self._map

    def __rich_repr__(self):
        for dest, value in self._map.items():
            yield dest, value


__all__ = ("Values",)
