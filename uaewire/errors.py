"""Error taxonomy for the ingestion and curation pipelines."""

from typing import Optional


class UaewireError(Exception):
    """Base class for pipeline errors."""

    status_code: int = 500


class ValidationFailure(UaewireError):
    """Malformed caller input, rejected before any network call."""

    status_code = 400


class AuthorizationFailure(UaewireError):
    """Missing or incorrect shared secret."""

    status_code = 401


class ProviderError(UaewireError):
    """Transient failure talking to a remote provider."""

    status_code = 502

    def __init__(self, provider: str, message: str, status: Optional[int] = None) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status = status


class ProviderExhaustedError(ProviderError):
    """Provider answered with a rate-limit response; the batch must stop."""

    status_code = 429


class PersistenceError(UaewireError):
    """A write to the corpus or run-log store failed."""

    status_code = 500
