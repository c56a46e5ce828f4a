from pydantic import Field

from .recipe_base import RecipeBase


class RecipeUpdate(RecipeBase):
    # The title is immutable; supplying one on update is rejected.
    title: str | None = Field(None, max_length=255)
