import logging
import re
from dataclasses import dataclass

from app.core import errors
from app.core.errors import APIError
from app.schemas.error import ErrorObject

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass
class PageVariables:
    default_max_results: int
    limit: int
    offset: int


def _parse_int(value: str) -> int:
    # ASCII digits with an optional sign; int() also accepts "1_0", " 5" and non-ASCII digits
    if not _INTEGER_PATTERN.fullmatch(value):
        raise ValueError(f"not an integer: {value!r}")
    return int(value)


def calculate_limit(default_limit: int, maximum_limit: int, requested_limit: str | None) -> int:
    """
    Return a valid number of items to return from a query.
    Raises APIError carrying the raw requested value when it is unusable.
    """
    if not requested_limit:
        return default_limit

    error_values = {"limit": requested_limit}

    try:
        limit = _parse_int(requested_limit)
    except ValueError:
        logger.warning("invalid limit value, not a number: %s", requested_limit)
        raise APIError(errors.ERR_LIMIT_WRONG_TYPE, values=error_values)

    if limit < 0:
        logger.warning("invalid limit value, negative: %s", requested_limit)
        raise APIError(errors.ERR_NEGATIVE_LIMIT, values=error_values)

    if limit > maximum_limit:
        logger.warning(
            "invalid limit value, %s exceeds maximum of %d", requested_limit, maximum_limit
        )
        raise APIError(errors.limit_exceeded(maximum_limit), values=error_values)

    return limit


def calculate_offset(requested_offset: str | None) -> int:
    """
    Return a valid number of items to skip from a query.
    """
    if not requested_offset:
        return 0

    error_values = {"offset": requested_offset}

    try:
        offset = _parse_int(requested_offset)
    except ValueError:
        logger.warning("invalid offset value, not a number: %s", requested_offset)
        raise APIError(errors.ERR_OFFSET_WRONG_TYPE, values=error_values)

    if offset < 0:
        logger.warning("invalid offset value, negative: %s", requested_offset)
        raise APIError(errors.ERR_NEGATIVE_OFFSET, values=error_values)

    return offset


def validate_page(page: PageVariables) -> list[ErrorObject]:
    """
    Cross-check offset against the result ceiling, clamping the limit so
    that offset + limit never passes it. An offset past the ceiling is
    reported and leaves the limit untouched.
    """
    if page.offset >= page.default_max_results:
        return [
            ErrorObject(
                error=errors.maximum_offset_reached(page.default_max_results),
                error_values={"offset": str(page.offset)},
            )
        ]

    if page.offset + page.limit > page.default_max_results:
        page.limit = page.default_max_results - page.offset

    return []


def get_page_variables(
    default_max_results: int,
    requested_limit: str | None,
    requested_offset: str | None,
) -> tuple[PageVariables, list[ErrorObject]]:
    """
    Normalise the limit and offset query parameters against the ceiling,
    collecting every problem with the request rather than stopping at the
    first one.
    """
    error_objects: list[ErrorObject] = []
    limit = offset = 0
    offset_ok = True

    try:
        limit = calculate_limit(DEFAULT_LIMIT, default_max_results, requested_limit)
    except APIError as e:
        error_objects.append(e.to_error_object())

    try:
        offset = calculate_offset(requested_offset)
    except APIError as e:
        error_objects.append(e.to_error_object())
        offset_ok = False

    page = PageVariables(default_max_results=default_max_results, limit=limit, offset=offset)

    # the offset ceiling is still reported alongside a bad limit; the clamp
    # only applies to an otherwise valid page
    if offset_ok and (not error_objects or page.offset >= page.default_max_results):
        error_objects.extend(validate_page(page))

    return page, error_objects
