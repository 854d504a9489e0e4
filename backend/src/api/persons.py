import uuid

from fastapi import APIRouter

from api.schemas import Created, NewPerson, PersonDetails, PersonStub
from core.database import get_db
from services.catalog import CatalogService
from services.stats import StatsService

router = APIRouter(prefix="/person", tags=["persons"])


@router.post("", status_code=201, response_model=Created)
async def create_person(person: NewPerson):
    async with get_db() as db:
        created = await CatalogService(db).create_person(person.name)
    return {"id": created.id}


@router.get("", response_model=list[PersonStub])
async def list_persons(name: str | None = None, page: int = 0, per_page: int | None = None):
    async with get_db() as db:
        return await CatalogService(db).list_persons(name=name, page=page, per_page=per_page)


@router.get("/{person_id}", response_model=PersonDetails)
async def get_person_details(person_id: uuid.UUID):
    async with get_db() as db:
        return await StatsService(db).person_details(person_id)
