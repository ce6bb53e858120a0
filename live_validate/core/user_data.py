from __future__ import annotations

from typing import Any, Callable, Dict, Generic, Iterable, Optional, Tuple, Type, TypeVar, overload


T = TypeVar("T")


class DataKey(Generic[T]):
    """Typed key handle for values stored in a session's user data.

    Using a typed key provides better type inference for `get`/`set` calls.
    """

    __slots__ = ("name", "default")

    def __init__(self, name: str, default: Optional[T] = None) -> None:
        self.name = name
        self.default = default

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"DataKey(name={self.name!r}, default={self.default!r})"


class UserData:
    """Key/value store owned by one session.

    Module scopes of a session share their parent's store, so a marker set
    from any scope is visible to all of them. Keys are plain strings or typed
    `DataKey` handles; a `DataKey`'s default is returned until a value is set.
    """

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}

    @overload
    def get(self, key: DataKey[T]) -> Optional[T]:
        ...

    @overload
    def get(self, key: DataKey[T], default: T) -> T:
        ...

    @overload
    def get(self, key: str) -> Any:
        ...

    @overload
    def get(self, key: str, default: T) -> T:
        ...

    def get(self, key: DataKey[Any] | str, default: Any = None) -> Any:
        name = key.name if isinstance(key, DataKey) else key
        if name in self._values:
            return self._values[name]
        if default is not None:
            return default
        return key.default if isinstance(key, DataKey) else None

    @overload
    def set(self, key: DataKey[T], value: T) -> None:
        ...

    @overload
    def set(self, key: str, value: Any) -> None:
        ...

    def set(self, key: DataKey[Any] | str, value: Any) -> None:
        name = key.name if isinstance(key, DataKey) else key
        self._values[name] = value

    def clear(self, *names: str) -> None:
        """Clear selected keys (or all if none provided) back to their defaults."""
        to_clear: Iterable[str] = names or tuple(self._values.keys())
        for name in to_clear:
            self._values.pop(name, None)

    def __contains__(self, key: DataKey[Any] | str) -> bool:
        name = key.name if isinstance(key, DataKey) else key
        return name in self._values

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._values.keys())

    def items(self) -> Tuple[Tuple[str, Any], ...]:
        return tuple(self._values.items())


U = TypeVar("U")


class _DefineKey:
    """Callable + subscribable factory for `DataKey`.

    Supports both:
    - define_key("name", default=None)
    - define_key[T]("name", default=None)
    """

    def __call__(self, name: str, default: Optional[U] = None) -> DataKey[U]:
        return DataKey(name, default)

    def __getitem__(self, _typ: Type[U]) -> Callable[[str, Optional[U]], DataKey[U]]:
        def factory(name: str, default: Optional[U] = None) -> DataKey[U]:
            return DataKey(name, default)

        return factory


define_key = _DefineKey()


__all__ = [
    "DataKey",
    "UserData",
    "define_key",
]
