from fastapi import HTTPException
from pydantic import BaseModel
from typing import Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class UnknownDrill(DomainException):
    def __init__(self, drill_id: str) -> None:
        super().__init__(
            status_code=404,
            title="Drill not found",
            detail=f"spare drill '{drill_id}' not found",
            code="drill_not_found",
        )


class InvalidBowlingEvent(DomainException):
    """A replayed event is illegal for the game state it is applied to."""

    def __init__(self, event_number: int, reason: str) -> None:
        super().__init__(
            status_code=400,
            title="Invalid bowling event",
            detail=f"event #{event_number}: {reason}",
            code="bowling_event_invalid",
        )
        self.event_number = event_number


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc
