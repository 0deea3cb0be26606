"""Proxy error taxonomy; every error renders as a JSON {code, msg} body."""

from __future__ import annotations

from typing import Any


class ProxyError(Exception):
    """Base error carrying the HTTP status and the user-facing message."""

    status: int = 500
    msg: str = "internal server error"
    outcome: str = "internal_error"

    def __init__(self, msg: str | None = None, status: int | None = None) -> None:
        if msg is not None:
            self.msg = msg
        if status is not None:
            self.status = status
        super().__init__(self.msg)

    def to_body(self) -> dict[str, Any]:
        return {"code": self.status, "msg": self.msg}


class InputValidationError(ProxyError):
    status = 400
    msg = "invalid amount"
    outcome = "invalid_amount"


class AuthenticationError(ProxyError):
    status = 401
    msg = "authentication failed"
    outcome = "auth_failed"


class UpstreamError(ProxyError):
    """Upstream non-success; the upstream JSON body is relayed when there is one."""

    status = 502
    msg = "voice API returned an error"
    outcome = "upstream_error"

    def __init__(
        self,
        msg: str | None = None,
        status: int | None = None,
        body: dict[str, Any] | None = None,
        outcome: str | None = None,
    ) -> None:
        super().__init__(msg, status)
        self.body = body
        if outcome is not None:
            self.outcome = outcome

    def to_body(self) -> dict[str, Any]:
        if self.body is not None:
            return self.body
        return super().to_body()


class UpstreamTimeout(ProxyError):
    status = 504
    msg = "request timed out"
    outcome = "timeout"


class InternalError(ProxyError):
    """Catch-all failure; exposes the underlying error text."""

    status = 500
    msg = "internal server error"
    outcome = "internal_error"

    def __init__(self, error: str, msg: str | None = None, status: int | None = None) -> None:
        super().__init__(msg, status)
        self.error = error

    def to_body(self) -> dict[str, Any]:
        return {"code": self.status, "msg": self.msg, "error": self.error}
