from pydantic import BaseModel, Field

from .ingredient import Ingredient
from .location import Location


# Fields default to their zero value; absence and zero are judged alike by
# the recipe validator.
class RecipeBase(BaseModel):
    cook_time: int = 0
    difficulty: str = Field("", max_length=50)
    extra_ingredients: list[Ingredient] = Field(default_factory=list, max_length=100)
    favourite: bool = False
    ingredients: list[Ingredient] = Field(default_factory=list, max_length=100)
    location: Location = Field(default_factory=Location)
    notes: str | None = Field(None, max_length=50000)
    portion_size: int = 0
    tags: list[str] | None = None
