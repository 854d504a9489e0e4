import uuid

from fastapi import APIRouter

from api.schemas import Created, MovieDetails, MovieStub, NewMovie
from core.database import get_db
from services.catalog import CatalogService
from services.stats import StatsService

router = APIRouter(prefix="/movie", tags=["movies"])


@router.post("", status_code=201, response_model=Created)
async def create_movie(movie: NewMovie):
    async with get_db() as db:
        created = await CatalogService(db).create_movie(**movie.model_dump())
    return {"id": created.id}


@router.get("", response_model=list[MovieStub])
async def list_movies(name: str | None = None, page: int = 0, per_page: int | None = None):
    async with get_db() as db:
        return await CatalogService(db).list_movies(name=name, page=page, per_page=per_page)


@router.get("/{movie_id}", response_model=MovieDetails)
async def get_movie_details(movie_id: uuid.UUID):
    async with get_db() as db:
        return await StatsService(db).movie_details(movie_id)
