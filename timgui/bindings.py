"""
Non-owning handles to caller data.

Elements are rebuilt every frame, so the values they edit live in the
embedding application. A binding is anything with ``get()`` and
``set(value)``; elements never keep the value itself. Several radio options
built over the same binding behave as one group.
"""

from __future__ import annotations

from typing import Any, Generic, MutableMapping, MutableSequence, TypeVar, Union

T = TypeVar("T")


class Ref(Generic[T]):
    """A mutable cell owned by the caller.

    Example:
        >>> name = Ref("")
        >>> TextEdit(name)
    """

    __slots__ = ("value",)

    def __init__(self, value: T):
        self.value = value

    def get(self) -> T:
        return self.value

    def set(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


class AttrRef:
    """Binds to ``getattr(obj, name)``."""

    __slots__ = ("obj", "name")

    def __init__(self, obj: Any, name: str):
        self.obj = obj
        self.name = name

    def get(self) -> Any:
        return getattr(self.obj, self.name)

    def set(self, value: Any) -> None:
        setattr(self.obj, self.name, value)

    def __repr__(self) -> str:
        return f"AttrRef({type(self.obj).__name__}.{self.name})"


class ItemRef:
    """Binds to ``container[key]`` of a dict or list."""

    __slots__ = ("container", "key")

    def __init__(self, container: Union[MutableMapping, MutableSequence], key: Any):
        self.container = container
        self.key = key

    def get(self) -> Any:
        return self.container[self.key]

    def set(self, value: Any) -> None:
        self.container[self.key] = value

    def __repr__(self) -> str:
        return f"ItemRef({self.key!r})"
