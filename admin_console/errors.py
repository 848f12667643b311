# admin_console/errors.py
from typing import Any, Optional


class AdminError(Exception):
    """Base class for every error raised by the console."""


class ValidationError(AdminError):
    """A form failed the local check, no request was sent."""


class GatewayError(AdminError):
    """A call to the remote API did not succeed."""


class NetworkError(GatewayError):
    pass


class ServerError(GatewayError):
    def __init__(self, status_code: int, detail: Optional[Any] = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}")
