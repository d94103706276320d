import enum

from fastapi import status


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "NotFound"
    FORBIDDEN = "Forbidden"
    INVALID_STATE = "InvalidState"
    CONFLICT = "Conflict"
    VALIDATION = "Validation"


# Role/ownership failures are reported as 401, matching the existing clients
STATUS_CODES = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
}


class AppError(Exception):
    """Business error raised by services and translated to HTTP by the global handler."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @classmethod
    def not_found(cls, message: str = "Not found"):
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def forbidden(cls, message: str = "Unauthorized"):
        return cls(ErrorKind.FORBIDDEN, message)

    @classmethod
    def invalid_state(cls, message: str):
        return cls(ErrorKind.INVALID_STATE, message)

    @classmethod
    def conflict(cls, message: str):
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def validation(cls, message: str):
        return cls(ErrorKind.VALIDATION, message)
