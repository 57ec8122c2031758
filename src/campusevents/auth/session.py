"""Session collaborator contract and a mapping-backed implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import MutableMapping

USER_SESSION_KEY = "user_id"
USER_ROLE_KEY = "user_role"


class SessionStore(Protocol):
    """Interface for a key-value store scoped to one client session."""

    def get(self, key: str) -> Any | None:
        """Return the value for key, or None when absent."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a value under key."""
        ...

    def remove(self, key: str) -> None:
        """Remove key if present."""
        ...

    def invalidate(self) -> None:
        """Drop all session state."""
        ...


class DictSession:
    """SessionStore over a mutable mapping.

    Wraps Starlette's ``request.session`` in the API, or a plain dict in tests.
    """

    def __init__(self, data: MutableMapping[str, Any] | None = None) -> None:
        self._data: MutableMapping[str, Any] = data if data is not None else {}

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def invalidate(self) -> None:
        self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"<DictSession(keys={sorted(self._data)!r})>"
