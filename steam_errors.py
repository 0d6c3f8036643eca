"""Errors raised while parsing SteamIDs and talking to Steam."""


class SteamError(Exception):
    """Base class for recoverable Steam identifier errors."""


class ParseError(SteamError):
    """
    The given text could not be turned into a SteamID.
    ``text`` holds the offending input exactly as it was presented to the parser (stripped).
    """

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.message = message
        self.text = text

    def __str__(self) -> str:
        if self.text:
            return f"{self.message}: {self.text!r}"
        return self.message


class ResolutionError(SteamError):
    """The Web API answered, but the vanity name did not resolve."""

    def __init__(self, message: str, slug: str):
        super().__init__(message)
        self.message = message
        self.slug = slug

    def __str__(self) -> str:
        return f"{self.message} (vanity name {self.slug!r})"


class TransportError(SteamError):
    """The HTTP request itself failed (connection, timeout, non-2xx). Always chained to the cause."""

    def __init__(self, url: str, message: str = "request failed"):
        super().__init__(message)
        self.url = url
        self.message = message

    def __str__(self) -> str:
        return f"{self.message}: {self.url}"


class ConsistencyError(AssertionError):
    """A SteamID was built that breaks the codec's own invariants. Indicates a bug, not bad input."""
