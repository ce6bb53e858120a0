from __future__ import annotations

import itertools
import logging
from contextvars import ContextVar
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_current_observer: ContextVar[Optional['Observer']] = ContextVar("live_validate_current_observer", default=None)


def _same(old: Any, new: Any) -> bool:
    if old is new:
        return True
    try:
        return bool(type(old) is type(new) and old == new)
    except (TypeError, ValueError):
        # Values without a usable truth value for `==` (e.g. arrays) always count as changed
        return False


class ReactiveValue(Generic[T]):
    """
    A reactive cell.

    Reading it from inside a running observer makes that observer depend on
    it; writing a different value invalidates every dependent observer, which
    is then re-run by the next `ReactiveRuntime.flush()`.
    """

    def __init__(self, runtime: 'ReactiveRuntime', initial: T, label: Optional[str] = None) -> None:
        self._runtime = runtime
        self._value = initial
        self.label = label
        self._dependents: Dict[int, Observer] = {}

    def get(self) -> T:
        observer = _current_observer.get()
        if observer is not None:
            observer._depend_on(self)
        return self._value

    def set(self, value: T) -> None:
        if _same(self._value, value):
            return
        self._value = value
        dependents = list(self._dependents.values())
        self._dependents.clear()
        for observer in dependents:
            observer.invalidate()

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"ReactiveValue(label={self.label!r}, value={self._value!r})"


class Observer:
    """A block of code that re-runs whenever a reactive value it read changes."""

    def __init__(self, runtime: 'ReactiveRuntime', fn: Callable[[], Any], priority: int, label: Optional[str], seq: int) -> None:
        self._runtime = runtime
        self._fn = fn
        self.priority = priority
        self.label = label or getattr(fn, "__qualname__", "observer")
        self.seq = seq
        self._dependencies: List[ReactiveValue[Any]] = []
        self._invalidated = False
        self._destroyed = False

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def _depend_on(self, value: ReactiveValue[Any]) -> None:
        if id(self) not in value._dependents:
            value._dependents[id(self)] = self
            self._dependencies.append(value)

    def _clear_dependencies(self) -> None:
        for value in self._dependencies:
            value._dependents.pop(id(self), None)
        self._dependencies.clear()

    def invalidate(self) -> None:
        if self._destroyed or self._invalidated:
            return
        self._invalidated = True
        self._clear_dependencies()
        self._runtime._schedule(self)

    def run(self) -> None:
        if self._destroyed:
            return
        self._invalidated = False
        self._clear_dependencies()
        token = _current_observer.set(self)
        try:
            self._fn()
        finally:
            _current_observer.reset(token)

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self._clear_dependencies()
        self._runtime._discard(self)
        logger.debug(f"[REACTIVE] Destroyed observer {self.label}")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Observer(label={self.label!r}, priority={self.priority!r}, destroyed={self._destroyed!r})"


class ReactiveRuntime:
    """
    Minimal single-threaded reactive runtime.

    Invalidated observers wait in a pending set until `flush()`, which runs
    them highest priority first; observers sharing a priority run in the
    order they were created.
    """

    def __init__(self) -> None:
        self._pending: Dict[int, Observer] = {}
        self._seq = itertools.count()
        self._flushing = False

    def reactive_value(self, initial: T, *, label: Optional[str] = None) -> ReactiveValue[T]:
        return ReactiveValue(self, initial, label)

    def observe(self, fn: Callable[[], Any], *, priority: int = 0, label: Optional[str] = None) -> Observer:
        """Create an observer and run it immediately."""
        observer = Observer(self, fn, priority, label, next(self._seq))
        logger.debug(f"[REACTIVE] Created observer {observer.label} (priority {priority})")
        try:
            observer.run()
        except Exception:
            observer.destroy()
            raise
        return observer

    def isolate(self, fn: Callable[[], T]) -> T:
        token = _current_observer.set(None)
        try:
            return fn()
        finally:
            _current_observer.reset(token)

    def has_pending(self) -> bool:
        return bool(self._pending)

    def _schedule(self, observer: Observer) -> None:
        self._pending[id(observer)] = observer

    def _discard(self, observer: Observer) -> None:
        self._pending.pop(id(observer), None)

    def flush(self) -> int:
        """
        Re-run invalidated observers until none are left.

        Returns:
            Number of observer runs. A flush requested while one is already in
            progress returns 0; the outer flush picks up the new work.
        """
        if self._flushing:
            return 0

        self._flushing = True
        ran = 0
        try:
            while self._pending:
                observer = min(self._pending.values(), key=lambda o: (-o.priority, o.seq))
                del self._pending[id(observer)]
                try:
                    observer.run()
                except Exception:
                    logger.exception(f"[REACTIVE] Observer {observer.label} failed")
                    raise
                ran += 1
        finally:
            self._flushing = False

        if ran:
            logger.debug(f"[REACTIVE] Flush ran {ran} observer(s)")
        return ran


__all__ = [
    "ReactiveValue",
    "Observer",
    "ReactiveRuntime",
]
