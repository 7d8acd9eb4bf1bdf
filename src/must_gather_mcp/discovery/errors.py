class DiscoveryError(ValueError):
    """Base class for errors reported back to the caller of a discovery operation."""


class InvalidInputError(DiscoveryError):
    """Raised when request arguments are missing or malformed."""


class TypeNotFoundError(DiscoveryError):
    """Raised when none of the requested type names resolve to a definition."""

    def __init__(self, available_types: list[str]) -> None:
        self.available_types = available_types
        super().__init__(f"No types found. Available types: {', '.join(available_types)}")
