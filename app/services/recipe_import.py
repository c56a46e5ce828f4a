"""
Bulk import of recipes from a CSV export of the recipes spreadsheet.

Columns, in order: title, portion_size, link, cook_book, page, tags,
favourite, cook_time, difficulty, notes, ingredients, extra_ingredients.
Tags are separated by "/" and ingredient cells look like
"(flour:200:g)(eggs:2:)".
"""
import csv
import io
import logging
from typing import Iterable

import httpx
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas import Ingredient, Location, RecipeCreate
from app.services import recipe_service
from app.validation import ValidationMode, recipe_id_from_title, validate_recipe

logger = logging.getLogger(__name__)

CSV_CONTENT_TYPE = "text/csv"
COLUMN_COUNT = 12


class RecipeImportError(Exception):
    pass


def _to_int(value: str, field: str, line_number: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning("%s value unreadable on line %d: %r", field, line_number, value)
        return 0


def parse_ingredients(cell: str, line_number: int = 0) -> list[Ingredient]:
    ingredients = []
    for part in cell.replace(")", "").split("("):
        if not part:
            continue

        item, _, rest = part.partition(":")
        quantity, _, unit = rest.partition(":")
        ingredients.append(
            Ingredient(
                item=item.strip(),
                quantity=_to_int(quantity.strip(), "quantity", line_number),
                unit=unit.strip() or None,
            )
        )
    return ingredients


def parse_recipes_csv(text: str) -> list[RecipeCreate]:
    """
    Parse CSV text into candidate recipes. The first row is a header and is
    skipped. Rows are not validated here.
    """
    reader = csv.reader(io.StringIO(text))
    if next(reader, None) is None:
        raise RecipeImportError("csv file is empty, expected a header row")

    recipes = []
    for line_number, line in enumerate(reader, start=2):
        if not any(line):
            continue
        if len(line) < COLUMN_COUNT:
            logger.warning(
                "skipping line %d, expected %d columns but found %d",
                line_number, COLUMN_COUNT, len(line),
            )
            continue

        recipes.append(
            RecipeCreate(
                title=line[0],
                portion_size=_to_int(line[1], "portion_size", line_number),
                location=Location(
                    link=line[2],
                    cook_book=line[3],
                    page=_to_int(line[4], "page", line_number) if line[4] else 0,
                ),
                tags=[tag for tag in line[5].split("/") if tag] or None,
                favourite=line[6] == "TRUE",
                cook_time=_to_int(line[7], "cook_time", line_number),
                difficulty=line[8],
                notes=line[9] or None,
                ingredients=parse_ingredients(line[10], line_number),
                extra_ingredients=parse_ingredients(line[11], line_number),
            )
        )

    logger.info("parsed %d recipes from csv", len(recipes))
    return recipes


async def download_recipes_csv(url: str, timeout: float) -> str:
    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.get(url)

    if response.status_code != 200:
        raise RecipeImportError(
            f"response from the url was {response.status_code} but expecting 200"
        )

    content_type = response.headers.get("content-type", "")
    if content_type.split(";")[0].strip() != CSV_CONTENT_TYPE:
        raise RecipeImportError(
            f"the file downloaded has content type '{content_type}', expected '{CSV_CONTENT_TYPE}'"
        )

    return response.text


async def import_recipes(db: AsyncSession, recipes: Iterable[RecipeCreate]) -> int:
    """
    Store every valid recipe that is not already present. Invalid rows are
    logged with their validation errors and skipped.
    """
    count = 0
    for recipe_in in recipes:
        recipe_id = recipe_id_from_title(recipe_in.title)

        error_objects = validate_recipe(recipe_in, ValidationMode.CREATE)
        if error_objects:
            logger.warning(
                "skipping invalid recipe %r: %s",
                recipe_id,
                [e.model_dump(exclude_none=True) for e in error_objects],
            )
            continue

        if await recipe_service.get_recipe_by_id(db=db, recipe_id=recipe_id):
            logger.info("skipping recipe %r, already exists", recipe_id)
            continue

        try:
            await recipe_service.create_recipe(db=db, recipe_in=recipe_in)
        except IntegrityError:
            await db.rollback()
            logger.info("skipping recipe %r, already exists", recipe_id)
            continue
        count += 1

    logger.info("successfully imported %d recipes", count)
    return count


async def import_recipes_from_url(db: AsyncSession, url: str, timeout: float) -> int:
    if not url:
        logger.warning("missing google sheets url, no data loaded")
        return 0

    logger.info("downloading recipe data from %s", url)
    text = await download_recipes_csv(url, timeout)
    return await import_recipes(db, parse_recipes_csv(text))
