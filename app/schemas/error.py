from pydantic import BaseModel


class ErrorObject(BaseModel):
    error: str
    error_values: dict[str, str] | None = None


class ErrorResponse(BaseModel):
    errors: list[ErrorObject]
