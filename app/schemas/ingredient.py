from pydantic import BaseModel, Field


class Ingredient(BaseModel):
    item: str = Field("", max_length=255)
    quantity: int = 0
    unit: str | None = Field(None, max_length=50)
