from .error import ErrorObject, ErrorResponse
from .ingredient import Ingredient
from .location import Location
from .patch import Patch
from .recipe_base import RecipeBase
from .recipe_create import RecipeCreate
from .recipe_update import RecipeUpdate
from .recipe import Recipe
from .recipe_list import Recipes

__all__ = [
    "ErrorObject",
    "ErrorResponse",
    "Ingredient",
    "Location",
    "Patch",
    "RecipeBase",
    "RecipeCreate",
    "RecipeUpdate",
    "Recipe",
    "Recipes",
]
