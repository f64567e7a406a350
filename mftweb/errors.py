"""Error page descriptions used by the web layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_NOT_FOUND_TITLE = "Page Not Found"
DEFAULT_NOT_FOUND_MESSAGE = "The page you are looking for does not exist."


@dataclass(frozen=True)
class ErrorPage:
    """Everything needed to render an error page."""

    code: int
    title: str
    message: str
    details: str = ""


def _details(err: BaseException | None) -> str:
    return "" if err is None else str(err)


def error_page(
    code: int, title: str, message: str, err: BaseException | None = None
) -> ErrorPage:
    """Build an error page with a status code, title, message and optional cause."""
    return ErrorPage(code=code, title=title, message=message, details=_details(err))


def not_found(title: str = "", message: str = "") -> ErrorPage:
    """A 404 page, falling back to default wording for empty fields."""
    return error_page(
        404,
        title or DEFAULT_NOT_FOUND_TITLE,
        message or DEFAULT_NOT_FOUND_MESSAGE,
    )


def bad_request(title: str, message: str) -> ErrorPage:
    """A 400 page."""
    return error_page(400, title, message)


def server_error(err: BaseException | None = None) -> ErrorPage:
    """A 500 page carrying the text of the error as details."""
    return error_page(
        500,
        "Internal Server Error",
        "An unexpected error occurred.",
        err,
    )


def method_not_allowed(method: str) -> ErrorPage:
    """A 405 page naming the rejected request method."""
    return error_page(
        405,
        "Method Not Allowed",
        f"The {method} method is not supported for this resource.",
    )


def recovered_error(recovered: Any) -> ErrorPage:
    """Turn any value caught while handling a request into a 500 page."""
    if isinstance(recovered, BaseException):
        return server_error(recovered)
    return server_error(RuntimeError(str(recovered)))