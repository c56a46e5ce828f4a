from app.schemas.error import ErrorObject

ERR_LIMIT_WRONG_TYPE = "limit value needs to be a number"
ERR_NEGATIVE_LIMIT = "limit needs to be a positive number, limit cannot be lower than 0"
ERR_OFFSET_WRONG_TYPE = "offset value needs to be a number"
ERR_NEGATIVE_OFFSET = "offset needs to be a positive number, offset cannot be lower than 0"

ERR_RECIPE_NOT_FOUND = "recipe not found"
ERR_RECIPE_ALREADY_EXISTS = "recipe already exists, use different title"

ERR_MISSING_FIELDS = "missing mandatory fields"
ERR_INVALID_UNITS = "invalid units for ingredient"
ERR_INVALID_DIFFICULTY = "invalid difficulty, must be one of: easy, moderate, hard"
ERR_INVALID_COOK_TIME = "invalid cook time, cannot be less than 1"
ERR_INVALID_PORTION_SIZE = "invalid portion size, cannot be less than 1"
ERR_UNABLE_TO_CHANGE_TITLE = "not allowed to change the existing title for recipe"

ERR_LOCATION_BOTH = "invalid location, provide either a cook book and page or a link, not both"
ERR_LOCATION_NEITHER = "missing location, provide either a cook book and page or a link"
ERR_LOCATION_PARTIAL = "invalid location, a cook book reference needs both a cook book and a page greater than 0"

ERR_UNABLE_TO_PARSE_JSON = "failed to parse json body"
ERR_UNAUTHORISED = "unauthorised to perform requested action"
ERR_PATCH_NOT_APPLIED = "applying patch operations to recipes is not supported"
ERR_INTERNAL_SERVER = "internal server error"


def limit_exceeded(maximum: int) -> str:
    return f"limit exceeded maximum value, limit cannot be greater than [{maximum}]"


def maximum_offset_reached(maximum: int) -> str:
    return f"the maximum offset has been reached, the offset cannot be more than {maximum}"


class APIError(Exception):
    """An error that maps onto a single error object in the response body."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        values: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.values = values or {}

    def to_error_object(self) -> ErrorObject:
        return ErrorObject(error=self.message, error_values=self.values or None)


class RequestValidationFailed(Exception):
    """Raised by the HTTP layer once a validator has returned failures."""

    def __init__(self, errors: list[ErrorObject], status_code: int = 400) -> None:
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors
        self.status_code = status_code
