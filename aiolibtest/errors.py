"""Errors raised before a test run starts."""


class ConfigurationError(Exception):
    """Raised when run options or command line arguments are invalid."""


class HelpRequested(Exception):
    """Raised by the argument parser when usage information was requested."""

    def __init__(self, usage: str) -> None:
        super().__init__(usage)
        self.usage = usage
