class Inject:
    """Marks a parameter with the identifier the container should resolve for it.

    Used as ``typing.Annotated`` metadata, leaving the declared type untouched.

    Attributes:
        identifier: Arbitrary dependency identifier.

    Example:
        >>> def handler(dsn: Annotated[str, Inject("database.dsn")]) -> None:
        ...     ...
        >>> container.invoke(handler)
    """

    __slots__ = ("identifier",)

    def __init__(self, identifier: str) -> None:
        """Initialize the marker.

        Args:
            identifier: Identifier or alias to resolve for the parameter.
        """
        self.identifier = identifier

    def __repr__(self) -> str:
        return f"Inject({self.identifier!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Inject) and other.identifier == self.identifier

    def __hash__(self) -> int:
        return hash((Inject, self.identifier))
