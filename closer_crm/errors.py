"""HTTP error taxonomy shared by every domain service."""

from fastapi import HTTPException


class InvalidInput(HTTPException):
    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status_code=400, detail=detail)


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "Not authenticated", headers: dict | None = None):
        super().__init__(status_code=401, detail=detail, headers=headers)


class InvalidCredentials(Unauthenticated):
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=403, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class Conflict(HTTPException):
    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=409, detail=detail)
