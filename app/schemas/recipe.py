from pydantic import ConfigDict

from .recipe_base import RecipeBase


class Recipe(RecipeBase):
    id: str
    title: str

    # for reading data from SQLAlchemy objects
    model_config = ConfigDict(from_attributes=True)
