from pydantic import BaseModel, Field


class Location(BaseModel):
    cook_book: str = Field("", max_length=255)
    link: str = Field("", max_length=2048)
    page: int = 0
