"""Exception types raised by the documentation pipeline."""


class DotNetDocsError(Exception):
    """Base class for all fatal pipeline errors."""


class InvalidFactsError(DotNetDocsError):
    """Raised when an assembly's symbol facts are internally inconsistent."""

    def __init__(self, assembly: str, detail: str) -> None:
        """Record the offending assembly alongside the detail message."""
        self.assembly = assembly
        self.detail = detail
        super().__init__(f"Invalid facts in assembly '{assembly}': {detail}")


class MalformedDocumentationError(DotNetDocsError):
    """Raised when a documentation comment cannot be parsed."""


class PathCollisionError(DotNetDocsError):
    """Raised when two graph nodes map to the same output location."""

    def __init__(self, path: str, first: str, second: str) -> None:
        """Record the colliding path and both node identities."""
        self.path = path
        self.first = first
        self.second = second
        super().__init__(
            f"Output path collision at '{path}': '{first}' and '{second}'"
        )


class ConfigError(DotNetDocsError):
    """Raised when the effective configuration holds an invalid value."""
