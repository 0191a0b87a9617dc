"""
Error kinds raised by the service layer.

Each failure the forum can report has its own class; the HTTP layer matches
on the class (see ``app.main``) and never on the message text.
"""

from fastapi import status


class ForumError(Exception):
    """Base class for every error the services raise on purpose."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ForumError):
    """Bad user input: malformed email, empty content, missing category, bad image."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class InvalidCredentials(ForumError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class Unauthenticated(ForumError):
    """No session cookie, or the token is not held by any user."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFound(ForumError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


class StorageError(ForumError):
    """Database or file storage failure. Never retried."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"
