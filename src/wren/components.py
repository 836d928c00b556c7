"""Sibling UI components the navigator drives.

The overlay, gallery and project (detail) view live outside this
package. The navigator only needs to close the first two and to ask
the detail view whether it is open, or to open it for a path. The
``Null*`` classes are inert stand-ins for sites without a component.
"""

from dataclasses import dataclass, field
from typing import Protocol


class Closable(Protocol):
    def close(self) -> None: ...


class DetailView(Protocol):
    def is_active(self) -> bool: ...
    def open(self, path: str) -> None: ...


class NullClosable:
    __slots__ = ()

    def close(self) -> None:
        return None


class NullDetailView:
    __slots__ = ()

    def is_active(self) -> bool:
        return False

    def open(self, path: str) -> None:
        return None


@dataclass(frozen=True, slots=True)
class Components:
    overlay: Closable = field(default_factory=NullClosable)
    gallery: Closable = field(default_factory=NullClosable)
    detail: DetailView = field(default_factory=NullDetailView)
