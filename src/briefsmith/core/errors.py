"""Error taxonomy for backend calls and response decoding"""

from typing import Optional


class BriefsmithError(Exception):
    """Base class for every failure surfaced by the generation pipeline"""


class TransportError(BriefsmithError):
    """Backend unreachable: network failure, timeout, connection refused"""


class BackendError(BriefsmithError):
    """Backend reachable but declined or errored"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(BriefsmithError):
    """Model response could not be coerced into the expected shape

    The raw text is kept for diagnostics only and is never shown to users.
    """

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text
