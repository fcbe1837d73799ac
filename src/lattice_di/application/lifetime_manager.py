import logging
from typing import Any, Dict, Optional, Tuple

from lattice_di.domain import DependencyDefinition, ILifetimeManager, Lifetime

logger = logging.getLogger(__name__)


class LifetimeManager(ILifetimeManager):
    """Caches produced values according to their definition's lifetime.

    Values are keyed by the definition's primary identifier, never by alias.

    Attributes:
        _singleton_cache: Values of singleton definitions, kept for the container's life.
        _scoped_cache: Values of scoped definitions, discarded when a scope begins.
    """

    def __init__(self, parent_singleton_cache: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the lifetime manager with empty caches.

        Args:
            parent_singleton_cache: Optional parent singleton cache for child scopes.
        """
        if parent_singleton_cache is not None:
            # Child scope: share parent's singleton cache
            self._singleton_cache: Dict[str, Any] = parent_singleton_cache
        else:
            self._singleton_cache = {}
        # Each scope has its own scoped cache
        self._scoped_cache: Dict[str, Any] = {}

    def cached(self, definition: DependencyDefinition) -> Tuple[bool, Any]:
        """Look up a cached value, singleton tier first.

        Args:
            definition: The definition whose value is requested.

        Returns:
            ``(True, value)`` on a hit, ``(False, None)`` otherwise.
        """
        identifier = definition.identifier

        if identifier in self._singleton_cache:
            return True, self._singleton_cache[identifier]

        if identifier in self._scoped_cache:
            return True, self._scoped_cache[identifier]

        return False, None

    def cache(self, definition: DependencyDefinition, value: Any) -> None:
        """Cache a value if its definition's lifetime allows it.

        Transient values are never cached.
        """
        if definition.lifetime == Lifetime.SINGLETON:
            self._singleton_cache[definition.identifier] = value
        elif definition.lifetime == Lifetime.SCOPED:
            self._scoped_cache[definition.identifier] = value

    def clear_scoped_cache(self) -> None:
        """Clear only the scoped values cache."""
        logger.debug("Discarding %d scoped value(s)", len(self._scoped_cache))
        self._scoped_cache.clear()

    def get_singleton_cache(self) -> Dict[str, Any]:
        """Get reference to singleton cache for scope inheritance.

        Returns:
            Reference to the singleton cache.
        """
        return self._singleton_cache
