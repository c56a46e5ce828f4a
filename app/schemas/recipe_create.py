from pydantic import Field

from .recipe_base import RecipeBase


class RecipeCreate(RecipeBase):
    title: str = Field("", max_length=255)
