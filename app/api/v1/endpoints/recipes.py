import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_authorisation
from app.core import errors
from app.core.config import Settings, get_settings
from app.core.errors import APIError, RequestValidationFailed
from app.db.session import get_db
from app.schemas import Recipe, RecipeCreate, RecipeUpdate, Recipes
from app.services import recipe_service
from app.validation import (
    Operation,
    PatchParseError,
    ValidationMode,
    get_page_variables,
    parse_patches,
    recipe_id_from_title,
    validate_patches,
    validate_recipe,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SUPPORTED_PATCH_OPS = (Operation.ADD, Operation.REMOVE, Operation.REPLACE)


async def _read_body(request: Request, model: type[BaseModel]) -> Any:
    body = await request.body()
    try:
        return model.model_validate_json(body)
    except ValidationError:
        logger.warning("unable to parse request body as %s", model.__name__)
        raise APIError(errors.ERR_UNABLE_TO_PARSE_JSON)


async def _get_existing_recipe(db: AsyncSession, recipe_id: str):
    db_recipe = await recipe_service.get_recipe_by_id(db=db, recipe_id=recipe_id)
    if not db_recipe:
        logger.warning("recipe not found: %s", recipe_id)
        raise APIError(errors.ERR_RECIPE_NOT_FOUND, status_code=404)
    return db_recipe


@router.get("/", response_model=Recipes)
async def read_recipes(
    *,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    limit: str | None = Query(None, description="Maximum number of recipes to return"),
    offset: str | None = Query(None, description="Number of recipes to skip"),
) -> Any:
    page, error_objects = get_page_variables(settings.DEFAULT_MAX_RESULTS, limit, offset)
    if error_objects:
        raise RequestValidationFailed(error_objects)

    total_count = await recipe_service.count_recipes(db)
    items = await recipe_service.get_recipes(db, offset=page.offset, limit=page.limit)

    return Recipes(
        count=len(items),
        items=[Recipe.model_validate(item) for item in items],
        limit=page.limit,
        offset=page.offset,
        total_count=total_count,
    )


@router.get("/{recipe_id}", response_model=Recipe)
async def read_recipe_by_id(*, db: AsyncSession = Depends(get_db), recipe_id: str) -> Any:
    return await _get_existing_recipe(db, recipe_id)


@router.post(
    "/",
    response_model=Recipe,
    status_code=201,
    dependencies=[Depends(require_authorisation)],
)
async def create_new_recipe(*, db: AsyncSession = Depends(get_db), request: Request) -> Any:
    recipe_in: RecipeCreate = await _read_body(request, RecipeCreate)

    error_objects = validate_recipe(recipe_in, ValidationMode.CREATE)
    if error_objects:
        raise RequestValidationFailed(error_objects)

    recipe_id = recipe_id_from_title(recipe_in.title)
    if await recipe_service.get_recipe_by_id(db=db, recipe_id=recipe_id):
        logger.warning("recipe already exists: %s", recipe_id)
        raise APIError(errors.ERR_RECIPE_ALREADY_EXISTS, status_code=409)

    try:
        return await recipe_service.create_recipe(db=db, recipe_in=recipe_in)
    except IntegrityError:
        await db.rollback()
        logger.warning("recipe already exists: %s", recipe_id)
        raise APIError(errors.ERR_RECIPE_ALREADY_EXISTS, status_code=409)


@router.put(
    "/{recipe_id}",
    response_model=Recipe,
    dependencies=[Depends(require_authorisation)],
)
async def update_existing_recipe(
    *, db: AsyncSession = Depends(get_db), recipe_id: str, request: Request
) -> Any:
    db_recipe = await _get_existing_recipe(db, recipe_id)

    recipe_in: RecipeUpdate = await _read_body(request, RecipeUpdate)

    error_objects = validate_recipe(recipe_in, ValidationMode.UPDATE)
    if error_objects:
        raise RequestValidationFailed(error_objects)

    return await recipe_service.replace_recipe(db=db, db_recipe=db_recipe, recipe_in=recipe_in)


@router.patch("/{recipe_id}", dependencies=[Depends(require_authorisation)])
async def patch_existing_recipe(
    *, db: AsyncSession = Depends(get_db), recipe_id: str, request: Request
) -> Any:
    await _get_existing_recipe(db, recipe_id)

    try:
        patches = parse_patches(await request.body())
    except PatchParseError as e:
        logger.warning("unable to parse patch request body: %s", e)
        raise APIError(str(e))

    violations = validate_patches(patches, SUPPORTED_PATCH_OPS)
    if violations:
        raise RequestValidationFailed([v.to_error_object() for v in violations])

    # patches are validated but never applied to the stored recipe
    raise APIError(errors.ERR_PATCH_NOT_APPLIED, status_code=501)


@router.delete(
    "/{recipe_id}",
    response_model=Recipe,
    dependencies=[Depends(require_authorisation)],
)
async def delete_existing_recipe(*, db: AsyncSession = Depends(get_db), recipe_id: str) -> Any:
    deleted_recipe = await recipe_service.delete_recipe(db=db, recipe_id=recipe_id)
    if not deleted_recipe:
        raise APIError(errors.ERR_RECIPE_NOT_FOUND, status_code=404)

    return deleted_recipe
