import sys
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.errors import APIError, ERR_INTERNAL_SERVER, RequestValidationFailed
from app.db.session import AsyncSessionLocal
from app.schemas import ErrorObject, ErrorResponse
from app.services.recipe_import import import_recipes_from_url

logger = logging.getLogger(__name__)

logging.basicConfig(level=logging.INFO, handlers=[logging.StreamHandler(sys.stdout)])


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DOWNLOAD_DATA:
        async with AsyncSessionLocal() as db:
            await import_recipes_from_url(db, settings.GOOGLE_SHEET_URL, settings.DOWNLOAD_TIMEOUT)
    yield


class RootResponse(BaseModel):
    status: str
    project_name: str
    version: str
    documentation_url: str


app = FastAPI(title="Food Recipes", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, error_objects: list[ErrorObject]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(errors=error_objects).model_dump(exclude_none=True),
    )


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    return error_response(exc.status_code, [exc.to_error_object()])


@app.exception_handler(RequestValidationFailed)
async def validation_failed_handler(request: Request, exc: RequestValidationFailed):
    return error_response(exc.status_code, exc.errors)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(500, [ErrorObject(error=ERR_INTERNAL_SERVER)])


app.include_router(api_router, prefix="/api/v1")


@app.get("/", response_model=RootResponse, tags=["Root"])
def read_root():
    return {
        "status": "ok",
        "project_name": app.title,
        "version": app.version,
        "documentation_url": "/docs",
    }


@app.get("/health", tags=["Root"])
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.APP_PORT)
