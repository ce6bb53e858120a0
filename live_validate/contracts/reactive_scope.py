from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, TypeVar

if TYPE_CHECKING:
    from live_validate.core.user_data import UserData

T = TypeVar("T")


class ObserverHandle(Protocol):
    def destroy(self) -> None:
        ...


class ReactiveCell(Protocol[T]):
    def get(self) -> T:
        ...

    def set(self, value: T) -> None:
        ...


class ReactiveScope(ABC):
    """
    What a validator needs from the host reactive runtime.

    A scope is a session, or a namespaced module scope of one. Field names
    passed to a scope are local to it; `ns()` turns them into the
    fully-qualified keys used in validation results.
    """

    @abstractmethod
    def ns(self, name: str) -> str:
        """Fully-qualify a field-local name."""
        raise NotImplementedError

    @abstractmethod
    def get_input(self, name: str) -> Any:
        """Current value of a field of this scope. Registers a reactive dependency."""
        raise NotImplementedError

    @abstractmethod
    def observe(self, fn: Callable[[], Any], *, priority: int = 0, label: Optional[str] = None) -> ObserverHandle:
        """Run `fn` now and again every time a reactive value it read changes."""
        raise NotImplementedError

    @abstractmethod
    def isolate(self, fn: Callable[[], T]) -> T:
        """Run `fn` without registering reactive dependencies."""
        raise NotImplementedError

    @abstractmethod
    def reactive_value(self, initial: T, *, label: Optional[str] = None) -> ReactiveCell[T]:
        raise NotImplementedError

    @abstractmethod
    def send_custom_message(self, message_type: str, payload: Any) -> None:
        """Deliver a message to the UI layer."""
        raise NotImplementedError

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once the session this scope belongs to has ended."""
        raise NotImplementedError

    @abstractmethod
    def on_close(self, callback: Callable[[], None]) -> None:
        """Run `callback` when the session ends, after its observers are destroyed."""
        raise NotImplementedError

    @property
    @abstractmethod
    def user_data(self) -> 'UserData':
        """Per-session key/value store, shared by all scopes of the session."""
        raise NotImplementedError
