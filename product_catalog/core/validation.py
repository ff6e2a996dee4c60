"""Input sanitizing and request validation.

Every field constraint of the service lives here or on the request models, and
is checked once, when the RPC boundary builds a domain request.
"""

import html
import uuid
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from product_catalog.core.exceptions import BadRequest

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000
DIMENSIONS_MAX_LENGTH = 50
MAX_PRICE = 1_000_000
MAX_PLAN_DURATION_DAYS = 3650

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_text(value: str) -> str:
    """Trim whitespace and HTML-escape reserved characters.

    Entities already present are decoded before escaping, so sanitizing an
    already sanitized value returns it unchanged.
    """
    return html.escape(html.unescape(value).strip(), quote=True)


def sanitize_url(value: str) -> str:
    """Return the trimmed URL if it uses http(s), otherwise an empty string.

    Callers must treat the empty string as a rejection, distinct from a
    missing value.
    """
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        return ""
    return value


def sanitize_download_link(value: str) -> str:
    """Sanitize a download link, rejecting non-empty input that is not http(s).

    An empty link is returned as-is so the "required" check can report it.
    """
    if not value.strip():
        return ""
    url = sanitize_url(value)
    if not url:
        raise BadRequest("invalid download_link format - must be a valid URL")
    return url


def parse_identifier(value: str, message: str = "invalid ID format") -> str:
    """Validate a UUID string and return its canonical form."""
    try:
        return str(uuid.UUID(value))
    except (ValueError, AttributeError, TypeError) as exc:
        raise BadRequest(message) from exc


def normalize_page(page: int, page_size: int) -> tuple[int, int]:
    """Apply pagination defaults to non-positive values."""
    if page <= 0:
        page = DEFAULT_PAGE
    if page_size <= 0:
        page_size = DEFAULT_PAGE_SIZE
    return page, page_size


def _format_error(error: dict[str, Any]) -> str:
    if error["type"] == "value_error":
        # Custom validators raise ValueError with a ready-made message
        return str(error["ctx"]["error"])
    field = ".".join(str(part) for part in error["loc"] if not isinstance(part, int))
    return f"{field}: {error['msg']}" if field else error["msg"]


def parse_request(model_cls: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Build a request model, reporting the first violation as BadRequest."""
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise BadRequest(_format_error(exc.errors()[0])) from exc
