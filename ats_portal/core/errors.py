"""
Error taxonomy shared by services and routes.

Services raise these; the handler registered in main.py turns them into
JSON responses of the form {"detail": "...", "error": "..."}. The "error"
key is what the resume-analysis screen reads, "detail" is what the
login/profile screens read.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# Auth / users

class DuplicateEmail(AppError):
    status_code = 400
    default_message = "Email already registered"


class InvalidCredentials(AppError):
    status_code = 401
    default_message = "Invalid email or password"


class UserNotFound(AppError):
    status_code = 404
    default_message = "User not found"


# Analysis

class MissingRole(AppError):
    status_code = 400
    default_message = "Job role is required"


class InvalidFileType(AppError):
    status_code = 400
    default_message = "Invalid file type. Only PDF resumes are allowed."


class FileTooLarge(AppError):
    status_code = 413
    default_message = "File too large"


class EmptyOrUnreadablePDF(AppError):
    status_code = 422
    default_message = "The uploaded PDF is empty or unreadable."


class NotResumeLike(AppError):
    status_code = 422
    default_message = "The uploaded PDF does not appear to be a resume."


class ExtractionError(AppError):
    status_code = 422
    default_message = "PDF Extraction Failed"


class NoModelAvailable(AppError):
    status_code = 503
    default_message = "No valid AI model available."


class UpstreamError(AppError):
    status_code = 502
    default_message = "Upstream service failed"


class LLMTimeout(UpstreamError):
    status_code = 504
    default_message = "AI request timed out"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
