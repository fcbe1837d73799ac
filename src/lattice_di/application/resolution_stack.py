"""Application layer - Resolution stack and circular reference detection."""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List

from lattice_di.domain import CircularReferenceError, ResolutionKey, ResolutionKind

logger = logging.getLogger(__name__)


class ResolutionStack:
    """Tracks the keys currently being resolved and detects cycles.

    Identifier-based and type-based resolutions share one stack of tagged
    keys, so a cycle alternating between ``get`` and ``construct`` is still
    detected. Uses thread-local storage so each thread sees only its own
    in-flight resolutions.

    Attributes:
        _local: Thread-local storage for resolution stacks.
    """

    def __init__(self) -> None:
        """Initialize the resolution stack with thread-local storage."""
        self._local = threading.local()

    def _get_stack(self) -> List[ResolutionKey]:
        """Get the current thread's resolution stack.

        Returns:
            The resolution stack for the current thread.
        """
        if not hasattr(self._local, "stack"):
            self._local.stack = []
        return self._local.stack

    def __contains__(self, key: ResolutionKey) -> bool:
        return key in self._get_stack()

    def identifiers(self) -> List[str]:
        """Return the identifiers currently being resolved through ``get``, oldest first."""
        return [key.name for key in self._get_stack() if key.kind == ResolutionKind.IDENTIFIER]

    def ensure_absent(self, key: ResolutionKey) -> None:
        """Fail if a key is already being resolved.

        The stack is cleared before raising so a caller that handles the
        error can go on resolving other dependencies.

        Args:
            key: The key about to be resolved.

        Raises:
            CircularReferenceError: If the key is already in the stack.

        Example:
            >>> stack = ResolutionStack()
            >>> stack.push(ResolutionKey.identifier("a"))
            >>> stack.ensure_absent(ResolutionKey.identifier("a"))  # Raises CircularReferenceError
        """
        stack = self._get_stack()

        if key in stack:
            # Build cycle path from first occurrence to current
            cycle = [str(entry) for entry in stack[stack.index(key) :]] + [str(key)]
            stack.clear()
            logger.warning("Circular reference detected: %s", " -> ".join(cycle))
            raise CircularReferenceError(key.name, cycle)

    def push(self, key: ResolutionKey) -> None:
        """Add a key to the resolution stack.

        Raises:
            CircularReferenceError: If the key is already in the stack.
        """
        self.ensure_absent(key)
        self._get_stack().append(key)

    def pop(self) -> None:
        """Remove the last key from the resolution stack.

        Safe to call after the stack was cleared by a failed resolution.
        """
        stack = self._get_stack()
        if stack:
            stack.pop()

    @contextmanager
    def entry(self, key: ResolutionKey) -> Iterator[None]:
        """Keep a key on the stack for the duration of the block."""
        self.push(key)
        try:
            yield
        finally:
            self.pop()

    def clear(self) -> None:
        """Clear the entire resolution stack."""
        if hasattr(self._local, "stack"):
            self._local.stack.clear()
