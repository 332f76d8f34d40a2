"""
Error taxonomy raised by the service layer.

All of these are HTTPExceptions so FastAPI routes them to the handlers in
`eventplanner.api.errors`, which shape them into the JSON envelope.
Anything that is not one of these is answered with a generic 500.
"""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """One or more field constraints were violated."""

    def __init__(self, errors: list[str], message: str = "Validation error"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
        self.errors = errors


class NotFoundError(HTTPException):
    def __init__(self, resource: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} not found")
        self.resource = resource


class BadRequestError(HTTPException):
    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
