from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from .lifetime import Lifetime
from ..errors import CircularDependencyError, ResolutionError


@dataclass
class Registration:
    interface: Type
    lifetime: Lifetime
    factory: Optional[Callable[[], Any]] = None
    kwargs: Dict[str, Any] = field(default_factory=dict)


class Container:
    """Type-keyed registry building services on first use.

    Resolution holds a re-entrant lock so a singleton is built once even
    when first requested from several threads; factories may resolve their
    own dependencies.
    """

    def __init__(self):
        self._registrations: Dict[Type, Registration] = {}
        self._singletons: Dict[Type, Any] = {}
        self._resolving: List[Type] = []
        self._lock = threading.RLock()

    def register_singleton(self, interface: Type, implementation: Optional[Type] = None, **kwargs):
        impl = implementation or interface
        self._registrations[interface] = Registration(interface, Lifetime.SINGLETON, impl, kwargs)

    def register_transient(self, interface: Type, implementation: Optional[Type] = None, **kwargs):
        impl = implementation or interface
        self._registrations[interface] = Registration(interface, Lifetime.TRANSIENT, impl, kwargs)

    def register_factory(self, interface: Type, factory: Callable[[], Any], *, singleton: bool = False):
        lifetime = Lifetime.SINGLETON if singleton else Lifetime.TRANSIENT
        self._registrations[interface] = Registration(interface, lifetime, factory)
        self._singletons.pop(interface, None)

    def register_instance(self, interface: Type, instance: Any):
        """Register an already-built object as a singleton."""
        self._registrations[interface] = Registration(interface, Lifetime.SINGLETON)
        self._singletons[interface] = instance

    def is_registered(self, interface: Type) -> bool:
        return interface in self._registrations

    def resolve(self, interface: Type) -> Any:
        with self._lock:
            reg = self._registrations.get(interface)
            if reg is None:
                raise ResolutionError(f"No registration found for {interface.__name__}")
            if interface in self._singletons:
                return self._singletons[interface]
            if interface in self._resolving:
                chain = " -> ".join(t.__name__ for t in [*self._resolving, interface])
                raise CircularDependencyError(f"Circular dependency: {chain}")
            self._resolving.append(interface)
            try:
                instance = reg.factory(**reg.kwargs)
            finally:
                self._resolving.pop()
            if reg.lifetime is Lifetime.SINGLETON:
                self._singletons[interface] = instance
            return instance
