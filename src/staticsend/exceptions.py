"""Custom exceptions raised by the send pipeline."""

from __future__ import annotations


class RedirectNotSupportedError(RuntimeError):
    """Raised when a directory is requested without a trailing slash.

    Serving it correctly requires a redirect to the slash-suffixed URL, which
    the pipeline does not perform.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Not implemented: redirect to directory '{path}/'")
        self.path = path
