from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


class AccountException(Exception):
    """Base class for account errors raised by the service layer"""
    default_message = "Account request failed"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class NoRegisteredArgumentsException(AccountException):
    default_message = "Required registration information was not provided."


class DuplicatedEmailException(AccountException):
    default_message = "This email is already registered."


class DuplicatedNickNameException(AccountException):
    default_message = "This nickname is already in use."


class InvalidCredentialsException(AccountException):
    default_message = "Email or password does not match."


class UserNotFoundException(AccountException):
    default_message = "User not found."


class InvalidProfileImageException(AccountException):
    default_message = "Profile image must be a JPEG, PNG, or GIF image."


class OAuthProviderError(AccountException):
    default_message = "OAuth provider request failed."


def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code),
        headers=getattr(exc, "headers", None)
    )
