"""Wren exception hierarchy.

Shared across Store, Navigator, PageController and the API client so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when configuration is invalid.

    Typically raised by ``AppConfig.validate()`` when the ``App`` is built.
    """


class StorageUnavailable(WrenError):  # noqa: N818
    """Session storage cannot be written.

    Raised by ``probe_storage()``. The ``Store`` catches it once at
    construction and runs in-memory only for the rest of the process.
    """


@dataclass(frozen=True, slots=True)
class FetchFailure(WrenError):  # noqa: N818
    """A content fetch failed.

    ``status`` is ``None`` for transport errors (connection refused,
    timeout) and the HTTP status code for non-2xx responses.
    """

    path: str
    status: int | None = None
    detail: str = ""

    def __str__(self) -> str:
        where = self.path
        if self.status is not None:
            where = f"{self.path} ({self.status})"
        if self.detail:
            return f"Fetch failed for {where}: {self.detail}"
        return f"Fetch failed for {where}"

    @property
    def not_found(self) -> bool:
        return self.status == 404
