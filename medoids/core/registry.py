"""
Component registry for distance functions and clusterers.

Allows plug-and-play registration of new components.
"""

from typing import Dict, Type, Any, Callable


class Registry:
    """
    Generic registry for component classes and callables.

    Usage:
        registry = Registry("distances")
        registry.register("euclidean", factory=euclidean)
        fn = registry.get("euclidean")
    """

    def __init__(self, name: str):
        self.name = name
        self._registry: Dict[str, Type] = {}
        self._factories: Dict[str, Callable] = {}

    def register(self, name: str, cls: Type = None, factory: Callable = None):
        """
        Register a component class or plain callable.

        Can be used as a decorator:
            @registry.register("manhattan")
            def manhattan(x, y):
                ...
        """
        def decorator(cls_or_fn):
            if isinstance(cls_or_fn, type):
                self._registry[name] = cls_or_fn
            else:
                self._factories[name] = cls_or_fn
            return cls_or_fn

        if cls is not None:
            self._registry[name] = cls
            return cls
        if factory is not None:
            self._factories[name] = factory
            return factory
        return decorator

    def get(self, name: str) -> Any:
        """Get a registered class or callable by name."""
        if name in self._registry:
            return self._registry[name]
        if name in self._factories:
            return self._factories[name]
        raise KeyError(f"'{name}' not found in {self.name} registry. "
                       f"Available: {self.list()}")

    def create(self, name: str, **kwargs) -> Any:
        """Create an instance of a registered class."""
        return self.get(name)(**kwargs)

    def list(self) -> list:
        """List all registered names."""
        return sorted(list(self._registry.keys()) + list(self._factories.keys()))

    def __contains__(self, name: str) -> bool:
        return name in self._registry or name in self._factories


_registries: Dict[str, Registry] = {}


def get_registry(name: str) -> Registry:
    """Get or create a named registry."""
    if name not in _registries:
        _registries[name] = Registry(name)
    return _registries[name]


distances = get_registry("distances")
clusterers = get_registry("clusterers")
