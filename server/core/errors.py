# server/core/errors.py

from fastapi import status


# -------------------------------
# Application Errors
# -------------------------------

class AppError(Exception):
    """
    Base class for failures that end a request.
    Rendered by the exception handler in main.py as {"error": message}.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    message = "Invalid data"


class Conflict(AppError):
    message = "Conflict"


class DuplicateUser(Conflict):
    message = "User exists"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class InvalidCredentials(Unauthorized):
    message = "Invalid credentials"


class InvalidOtp(Unauthorized):
    message = "Invalid OTP"


class MissingToken(Unauthorized):
    message = "Missing token"


class InvalidToken(Unauthorized):
    message = "Invalid token"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


# Same status and body as NotFound so ownership is never disclosed.
class NotAuthorizedForResource(NotFound):
    pass
