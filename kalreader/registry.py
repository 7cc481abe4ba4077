"""Named registries of interchangeable layers (sources, devices, outputs)."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")
C = TypeVar("C", bound=type)


class LayerRegistry(Generic[T]):
    """A collection of layer objects, each registered under a unique name."""

    def __init__(self) -> None:
        self._objects: dict[str, T] = {}

    def register(self, name: str, obj: T) -> bool:
        """Register ``obj`` under ``name``.

        The first object registered under a name wins; later ones are
        discarded and ``False`` is returned.
        """
        if name in self._objects:
            return False
        self._objects[name] = obj
        return True

    def get(self, name: str) -> T | None:
        """Return the object registered under ``name``, or None."""
        return self._objects.get(name)

    def objects(self) -> dict[str, T]:
        """Return the registered objects keyed by name, in name order."""
        return {name: self._objects[name] for name in sorted(self._objects)}

    def __contains__(self, name: object) -> bool:
        return name in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._objects))


def registered(registry: LayerRegistry) -> Callable[[C], C]:
    """Class decorator: instantiate the class and register it by its ``name``."""

    def decorator(cls: C) -> C:
        instance = cls()
        registry.register(instance.name, instance)
        return cls

    return decorator