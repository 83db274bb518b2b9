from typing import Optional


class FeedError(Exception):
    """Base class for failures raised while building a feed."""


class StoreUnavailable(FeedError):
    """The videos table could not be read (pool, connection or query failure)."""


class ProviderError(FeedError):
    """
    An external video provider did not answer with a usable page.

    `status` is the HTTP status code, or None when the request never got a
    response (timeout, connection error) or the body was not JSON.
    """

    def __init__(self, provider: str, status: Optional[int] = None, message: str = ""):
        self.provider = provider
        self.status = status
        detail = f"{provider} error: {status}" if status is not None else f"{provider} error"
        if message:
            detail = f"{detail} ({message})"
        super().__init__(detail)
