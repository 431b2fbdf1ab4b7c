"""Error types raised by axe_scope."""


class AxeScopeError(Exception):
    """Base class for every error raised by this package."""


class InvalidConstructionError(AxeScopeError, ValueError):
    """A required construction dependency is missing or unusable."""


class InvalidResponseError(AxeScopeError):
    """The browser returned a value without violations or passes."""


class ExecutionTimeoutError(AxeScopeError, TimeoutError):
    """The in-page scan did not complete within the script timeout."""


class ScriptDownloadError(AxeScopeError):
    """The engine script could not be fetched from its URL."""

    def __init__(self, url: str, status: int):
        super().__init__(f"Failed to download engine script from {url} (HTTP {status})")
        self.url = url
        self.status = status
