"""Unified quote result envelope.

Every QuoteService call returns this format instead of raising:
{
    "code": 0,           // 0=success, non-0=QuoteError code
    "message": "success",
    "kind": null,        // ErrorKind on error
    "data": { ... }      // null on error
}
"""

from typing import Any

from pydantic import BaseModel

from src.pm_common.enums import ErrorKind


class QuoteResponse(BaseModel):
    code: int = 0
    message: str = "success"
    kind: ErrorKind | None = None
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.code == 0


def success_response(data: Any = None) -> QuoteResponse:
    return QuoteResponse(code=0, message="success", data=data)


def error_response(code: int, message: str, kind: ErrorKind) -> QuoteResponse:
    return QuoteResponse(code=code, message=message, kind=kind, data=None)
