from pydantic import BaseModel

from .recipe import Recipe


class Recipes(BaseModel):
    count: int
    items: list[Recipe]
    limit: int
    offset: int
    total_count: int
