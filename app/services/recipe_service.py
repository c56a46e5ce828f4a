import logging
from typing import Sequence

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models import Recipe
from app.schemas import RecipeCreate, RecipeUpdate
from app.validation import recipe_id_from_title

logger = logging.getLogger(__name__)


async def count_recipes(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Recipe))
    return result.scalar_one()


async def get_recipes(db: AsyncSession, *, offset: int = 0, limit: int = 20) -> Sequence[Recipe]:
    query = select(Recipe).order_by(Recipe.id).offset(offset).limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


async def get_recipe_by_id(db: AsyncSession, *, recipe_id: str) -> Recipe | None:
    query = select(Recipe).where(Recipe.id == recipe_id)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def create_recipe(db: AsyncSession, *, recipe_in: RecipeCreate) -> Recipe:
    recipe_data = recipe_in.model_dump()
    db_recipe = Recipe(id=recipe_id_from_title(recipe_in.title), **recipe_data)

    db.add(db_recipe)
    await db.commit()
    await db.refresh(db_recipe)

    logger.info("recipe created: %s", db_recipe.id)
    return db_recipe


async def replace_recipe(db: AsyncSession, *, db_recipe: Recipe, recipe_in: RecipeUpdate) -> Recipe:
    # the title and the id derived from it never change
    update_data = recipe_in.model_dump(exclude={"title"})

    for field, value in update_data.items():
        setattr(db_recipe, field, value)

    db.add(db_recipe)
    await db.commit()
    await db.refresh(db_recipe)

    logger.info("recipe updated: %s", db_recipe.id)
    return db_recipe


async def delete_recipe(db: AsyncSession, *, recipe_id: str) -> Recipe | None:
    db_recipe = await get_recipe_by_id(db=db, recipe_id=recipe_id)
    if db_recipe:
        await db.delete(db_recipe)
        await db.commit()
        logger.info("recipe deleted: %s", recipe_id)
    return db_recipe
