"""Registry error types."""


class RegistryError(Exception):
    """A registry call failed (transport, HTTP status, payload or API error)."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code
