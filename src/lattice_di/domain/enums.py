from enum import Enum


class Lifetime(str, Enum):
    """Defines the lifetime of a dependency value.

    Attributes:
        TRANSIENT: New value produced on each resolution.
        SCOPED: Single value per scope (e.g., per HTTP request).
        SINGLETON: Single value shared for the whole life of the container.
    """

    TRANSIENT = "transient"
    SCOPED = "scoped"
    SINGLETON = "singleton"

    @property
    def ordinal(self) -> int:
        """Rank used when comparing lifetimes; longer-lived is greater."""
        return _ORDINALS[self]

    def __str__(self) -> str:
        return self.value


class ResolutionKind(str, Enum):
    """Addressing scheme of an entry on the resolution stack."""

    IDENTIFIER = "identifier"
    TYPE_NAME = "type_name"

    def __str__(self) -> str:
        return self.value


_ORDINALS = {
    Lifetime.TRANSIENT: 0,
    Lifetime.SCOPED: 1,
    Lifetime.SINGLETON: 2,
}
