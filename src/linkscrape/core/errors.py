"""Exception hierarchy for linkscrape."""


class ScrapeError(Exception):
    """Base exception for all scrape errors."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)

    def prefixed(self, prefix: str) -> "ScrapeError":
        """Return a copy of this error, same type and fields, with ``prefix: `` prepended."""
        error = self.__class__.__new__(self.__class__)
        error.__dict__.update(self.__dict__)
        error.args = (f"{prefix}: {self}",)
        return error


class InputError(ScrapeError):
    """The inbound request is malformed."""

    pass


class ConfigurationError(ScrapeError):
    """Credentials or a backend setting is missing or invalid."""

    pass


class TransportError(ScrapeError):
    """An upstream call kept failing until the retry budget ran out."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        attempts: int = 0,
        status_code: int | None = None,
    ):
        self.attempts = attempts
        self.status_code = status_code
        super().__init__(message, url)


class UpstreamRejected(ScrapeError):
    """The rendering backend answered with ``success: false``."""

    def __init__(self, message: str, capability: str, url: str | None = None):
        self.capability = capability
        super().__init__(message, url)


class DecodeError(ScrapeError):
    """The rendering backend answered with a body we cannot read."""

    def __init__(self, message: str, capability: str, url: str | None = None):
        self.capability = capability
        super().__init__(message, url)


class StorageError(ScrapeError):
    """Writing an object to the storage backend failed."""

    def __init__(self, message: str, key: str):
        self.key = key
        super().__init__(message)
