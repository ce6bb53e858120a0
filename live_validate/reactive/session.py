from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from live_validate.config import NAMESPACE_SEPARATOR
from live_validate.contracts.reactive_scope import ReactiveScope
from live_validate.core.user_data import UserData
from live_validate.reactive.runtime import Observer, ReactiveRuntime, ReactiveValue

logger = logging.getLogger(__name__)

T = TypeVar("T")

MessageHandler = Callable[[str, Any], None]


class Session(ReactiveScope):
    """
    In-memory reactive session.

    Holds the field inputs of one user session as reactive values, records
    every message sent to the UI layer in `messages`, and forwards each one to
    the registered handlers (the place to plug in a real transport).

    Usage:
        session = Session()
        form = session.module("signup")     # field keys become "signup-<name>"
        session.set_inputs(name="Ann")      # writes, then re-runs observers
    """

    def __init__(self, runtime: Optional[ReactiveRuntime] = None, *, on_message: Optional[MessageHandler] = None) -> None:
        self.runtime = runtime or ReactiveRuntime()
        self.namespace = ""
        self.root: Session = self
        self.parent: Optional[Session] = None
        self._closed = False
        self._inputs: Dict[str, ReactiveValue[Any]] = {}
        self._user_data = UserData()
        self._observers: List[Observer] = []
        self._close_callbacks: List[Callable[[], None]] = []
        self._handlers: List[MessageHandler] = [on_message] if on_message is not None else []
        self.messages: List[Tuple[str, Any]] = []

    # --------------- naming ---------------
    def ns(self, name: str) -> str:
        if not self.namespace:
            return name
        return f"{self.namespace}{NAMESPACE_SEPARATOR}{name}"

    def module(self, module_id: str) -> 'ModuleScope':
        """Namespaced scope for a sub-form; shares this session's state."""
        return ModuleScope(self, self.ns(module_id))

    # --------------- inputs ---------------
    def _input_value(self, key: str) -> ReactiveValue[Any]:
        if key not in self._inputs:
            self._inputs[key] = self.runtime.reactive_value(None, label=f"input${key}")
        return self._inputs[key]

    def get_input(self, name: str) -> Any:
        return self._input_value(self.ns(name)).get()

    def set_input(self, name: str, value: Any, *, flush: bool = True) -> None:
        self._input_value(self.ns(name)).set(value)
        if flush:
            self.flush()

    def set_inputs(self, **values: Any) -> None:
        """Write several inputs of this scope, then flush once."""
        for name, value in values.items():
            self.set_input(name, value, flush=False)
        self.flush()

    @property
    def input_keys(self) -> Tuple[str, ...]:
        return tuple(self._inputs.keys())

    # --------------- reactivity ---------------
    def observe(self, fn: Callable[[], Any], *, priority: int = 0, label: Optional[str] = None) -> Observer:
        observer = self.runtime.observe(fn, priority=priority, label=label)
        self._observers[:] = [o for o in self._observers if not o.destroyed]
        self._observers.append(observer)
        return observer

    def isolate(self, fn: Callable[[], T]) -> T:
        return self.runtime.isolate(fn)

    def reactive_value(self, initial: T, *, label: Optional[str] = None) -> ReactiveValue[T]:
        return self.runtime.reactive_value(initial, label=label)

    def flush(self) -> int:
        return self.runtime.flush()

    # --------------- messages ---------------
    def send_custom_message(self, message_type: str, payload: Any) -> None:
        logger.debug(f"[SESSION] Sending {message_type} message")
        self.messages.append((message_type, payload))
        for handler in list(self._handlers):
            handler(message_type, payload)

    def on_message(self, handler: MessageHandler) -> Callable[[], None]:
        """Register a message handler. Returns a function that unregisters it."""
        self._handlers.append(handler)

        def remove() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return remove

    def messages_of_type(self, message_type: str) -> List[Any]:
        return [payload for sent_type, payload in self.messages if sent_type == message_type]

    # --------------- state ---------------
    @property
    def user_data(self) -> UserData:
        return self._user_data

    @property
    def closed(self) -> bool:
        return self.root._closed

    def on_close(self, callback: Callable[[], None]) -> None:
        self._close_callbacks.append(callback)

    def close(self) -> None:
        """
        End the session: destroy every observer created through it or its
        modules, then run the `on_close` callbacks in registration order.
        """
        if self.closed:
            return
        self.root._closed = True
        for observer in list(self._observers):
            observer.destroy()
        self._observers.clear()
        for callback in list(self._close_callbacks):
            callback()
        self._close_callbacks.clear()
        logger.debug("[SESSION] Session closed")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"{self.__class__.__name__}(namespace={self.namespace!r})"


class ModuleScope(Session):
    """A namespaced view of a session, as used by a sub-form."""

    def __init__(self, parent: Session, namespace: str) -> None:
        self.runtime = parent.runtime
        self.namespace = namespace
        self.root = parent.root
        self.parent = parent
        self._inputs = parent._inputs
        self._user_data = parent._user_data
        self._observers = parent._observers
        self._close_callbacks = parent._close_callbacks
        self._handlers = parent._handlers
        self.messages = parent.messages


__all__ = [
    "MessageHandler",
    "Session",
    "ModuleScope",
]
