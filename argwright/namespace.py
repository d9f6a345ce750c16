"""
Argwright namespace: the per-parse value store.

A Namespace maps each dest to an ordered list of raw string values. It is
created fresh for every parse call and handed to the caller afterwards; the
engine never keeps a reference to it.

How values land here is decided by the action capability of each argument
(overwrite for store-like actions, append for append-like ones), not by the
engine.
"""
from collections.abc import Mapping


class Namespace(Mapping):
    """
    Mapping from dest to list[str].

    Lookups hand out copies, so callers cannot mutate parse results by accident.
    Equality is structural (inherited from Mapping), which keeps repeated parses
    of the same input comparable.
    """

    def __init__(self, values=(), /):
        self._values = {}
        for dest, object in dict(values).items():
            self.set_values(dest, object)

    def set_value(self, dest: str, value: str) -> None:
        """
        Replace the values stored under dest with a single value.
        """
        self._values[dest] = [str(value)]

    def set_values(self, dest: str, values) -> None:
        """
        Replace the values stored under dest.
        """
        if isinstance(values, str):
            values = [values]
        self._values[dest] = [str(value) for value in values]

    def append_values(self, dest: str, values) -> None:
        """
        Extend the values stored under dest, creating the entry when missing.
        """
        self._values.setdefault(dest, []).extend(str(value) for value in values)

    def __getitem__(self, dest):
        return list(self._values[dest])

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __contains__(self, dest):
        return dest in self._values

    def __rich_repr__(self):
        for dest, values in self._values.items():
            yield dest, _shape(values)

    def __repr__(self):
        return f"Namespace({", ".join(f"{dest}={_shape(values)!r}" for dest, values in self._values.items())})"


def _shape(values):
    # one value prints bare, none prints None, several print as a list
    match len(values):
        case 0:
            return None
        case 1:
            return values[0]
        case _:
            return list(values)


__all__ = (
    "Namespace",
)
