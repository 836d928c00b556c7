"""Non-persistent, cycle-scoped navigation state.

An entry set during navigation cycle N is readable through cycle N+1
and gone once cycle N+2 reaches its checkpoint::

    state = EphemeralState()
    state.set("scroll", 420)
    state.check()          # cycle boundary
    state.get("scroll")    # -> 420
    state.check()
    state.get("scroll")    # -> None

``check()`` is the checkpoint and must run exactly once per cycle.
"""

from dataclasses import dataclass
from typing import Any

# Entries live while ``generation - created < _LIFETIME``.
_LIFETIME = 2


@dataclass(slots=True)
class _Entry:
    value: Any
    created: int


class EphemeralState:
    """Ordered ``name -> [entry, ...]`` mapping swept by generation."""

    __slots__ = ("_entries", "_generation")

    def __init__(self) -> None:
        self._entries: dict[str, list[_Entry]] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def set(self, name: str, value: Any) -> None:
        """Add an entry. Earlier entries with the same name are kept."""
        self._entries.setdefault(name, []).append(_Entry(value, self._generation))

    def get(self, name: str) -> Any:
        """Return the earliest live value for *name*, or ``None``."""
        entries = self._entries.get(name)
        if not entries:
            return None
        return entries[0].value

    def check(self) -> None:
        """Advance one cycle and drop entries that have outlived it."""
        self._generation += 1
        for name in list(self._entries):
            live = [
                entry
                for entry in self._entries[name]
                if self._generation - entry.created < _LIFETIME
            ]
            if live:
                self._entries[name] = live
            else:
                del self._entries[name]

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def __contains__(self, name: object) -> bool:
        return name in self._entries
