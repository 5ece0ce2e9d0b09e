class MenuError(Exception):
    """Base class for all menu errors."""


class AmbiguousStyleError(MenuError, LookupError):
    """Raised when a single style is requested but several of that kind are attached."""

    def __init__(self, kind: str, count: int):
        self.kind = kind
        self.count = count
        super().__init__(
            f"MenuNode: there are {count} styles of kind '{kind}', "
            f"use get_styles_by_type() to get all of them"
        )


class UnknownStyleError(MenuError, KeyError):
    """Raised when no style class is registered for a kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(kind)

    def __str__(self):
        return f"No style registered for kind '{self.kind}'"


class MenuDefinitionError(MenuError, ValueError):
    """Raised when a serialized menu definition cannot be loaded."""


class MenuImportError(MenuError):
    """Raised when a menu cannot be imported from an HTML page."""
