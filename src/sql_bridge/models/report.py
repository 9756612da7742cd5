"""Structured failure report."""

from pydantic import BaseModel


class ErrorReport(BaseModel):
    """A failure as seen by the host: class code plus driver message."""

    code: str
    error: str
    message: str
