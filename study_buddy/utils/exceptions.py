"""Errors surfaced to API callers."""

from fastapi import HTTPException, status


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFound(HTTPException):
    def __init__(self, detail: str = "Conversation not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
