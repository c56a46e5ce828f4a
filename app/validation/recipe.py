"""
Cross-field validation of recipe payloads.

Every check runs on every call so a caller sees all problems with a recipe
in one response. Missing fields are grouped into a single error object; all
other failures are reported individually with the offending values attached.
"""
import enum

from app.core import errors
from app.schemas import ErrorObject, Ingredient, Location, RecipeCreate, RecipeUpdate
from app.validation.fields import (
    DIFFICULTIES,
    UNITS,
    is_non_empty,
    is_non_negative,
    is_non_zero,
    is_one_of,
    is_positive,
)


class ValidationMode(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"


class ErrorCollector:
    """Accumulates validation failures for a single entity."""

    def __init__(self) -> None:
        self.missing_fields: list[str] = []
        self.errors: list[ErrorObject] = []

    def missing(self, field: str) -> None:
        self.missing_fields.append(field)

    def add(self, message: str, values: dict[str, str] | None = None) -> None:
        self.errors.append(ErrorObject(error=message, error_values=values))

    def to_list(self) -> list[ErrorObject]:
        error_objects = list(self.errors)
        if self.missing_fields:
            error_objects.insert(
                0,
                ErrorObject(
                    error=errors.ERR_MISSING_FIELDS,
                    error_values={field: "" for field in self.missing_fields},
                ),
            )
        return error_objects


def recipe_id_from_title(title: str) -> str:
    return title.lower().replace(" ", "-")


def _validate_ingredients(
    collector: ErrorCollector, ingredients: list[Ingredient], field: str
) -> None:
    for i, ingredient in enumerate(ingredients):
        prefix = f"{field}.[{i}]"

        if not is_non_empty(ingredient.item):
            collector.missing(f"{prefix}.item")

        if not is_non_zero(ingredient.quantity):
            collector.missing(f"{prefix}.quantity")

        if ingredient.unit and not is_one_of(ingredient.unit, UNITS):
            collector.add(errors.ERR_INVALID_UNITS, {f"{prefix}.unit": ingredient.unit})


def _validate_location(collector: ErrorCollector, location: Location) -> None:
    has_cook_book = is_non_empty(location.cook_book)
    has_page = is_non_zero(location.page)
    has_link = is_non_empty(location.link)

    if has_link and not has_cook_book and not has_page:
        return
    if has_cook_book and is_positive(location.page) and not has_link:
        return

    if has_link:
        message = errors.ERR_LOCATION_BOTH
    elif not has_cook_book and not has_page:
        message = errors.ERR_LOCATION_NEITHER
    else:
        message = errors.ERR_LOCATION_PARTIAL

    collector.add(
        message,
        {
            "location.cook_book": location.cook_book,
            "location.page": str(location.page),
            "location.link": location.link,
        },
    )


def validate_recipe(
    recipe: RecipeCreate | RecipeUpdate, mode: ValidationMode = ValidationMode.CREATE
) -> list[ErrorObject]:
    """
    Validate a recipe for creation or for a full update.

    The difficulty is lower-cased in place whatever the outcome. Returns an
    empty list when the recipe is valid.
    """
    collector = ErrorCollector()

    if not is_non_zero(recipe.cook_time):
        collector.missing("cook_time")
    elif not is_non_negative(recipe.cook_time):
        collector.add(errors.ERR_INVALID_COOK_TIME, {"cook_time": str(recipe.cook_time)})

    recipe.difficulty = recipe.difficulty.lower()
    if not is_one_of(recipe.difficulty, DIFFICULTIES):
        collector.add(errors.ERR_INVALID_DIFFICULTY, {"difficulty": recipe.difficulty})

    _validate_ingredients(collector, recipe.extra_ingredients, "extra_ingredients")

    if not recipe.ingredients:
        collector.missing("ingredients")
    _validate_ingredients(collector, recipe.ingredients, "ingredients")

    _validate_location(collector, recipe.location)

    if not is_non_zero(recipe.portion_size):
        collector.missing("portion_size")
    if not is_non_negative(recipe.portion_size):
        collector.add(
            errors.ERR_INVALID_PORTION_SIZE, {"portion_size": str(recipe.portion_size)}
        )

    if mode is ValidationMode.CREATE:
        if not is_non_empty(recipe.title):
            collector.missing("title")
    elif is_non_empty(recipe.title):
        collector.add(errors.ERR_UNABLE_TO_CHANGE_TITLE, {"title": recipe.title})

    return collector.to_list()
