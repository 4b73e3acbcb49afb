"""
Error types raised across the genre fixer.

Upstream and name-match errors are recovered locally by the clients;
configuration, cancellation and index errors stop the run before any track
is touched.
"""


class GenreFixerError(Exception):
    """Base exception for genre fixer errors"""
    pass


class UpstreamUnavailable(GenreFixerError):
    """Raised when a tag provider cannot be reached or returns garbage"""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class NameMismatch(GenreFixerError):
    """Raised when a provider answers for an artist too far from the query"""

    def __init__(self, queried: str, returned: str, distance: float):
        super().__init__(
            f"provider matched '{returned}' for '{queried}' (distance {distance:.2f})"
        )
        self.queried = queried
        self.returned = returned
        self.distance = distance


class ConfigInvalid(GenreFixerError):
    """Raised when run configuration is missing or not well-formed"""
    pass


class DialogCancelled(GenreFixerError):
    """Raised when the user aborts the interactive prompt"""
    pass


class IndexLoadFailure(GenreFixerError):
    """Raised when the canonical genre table cannot be read"""
    pass
