import uuid

from fastapi import APIRouter

from api.schemas import NewNight, NightDetails
from core.database import get_db
from services.nights import NightRecorder
from services.stats import StatsService

router = APIRouter(prefix="/night", tags=["nights"])


@router.post("", response_model=dict[uuid.UUID, uuid.UUID])
async def create_night(night: NewNight):
    """Returns the view id of every participant, keyed by person id."""
    async with get_db() as db:
        return await NightRecorder(db).create_night(
            participants=night.persons,
            movie_id=night.movie,
            time=night.time,
            description=night.description,
        )


@router.get("/{night_id}", response_model=NightDetails)
async def get_night_details(night_id: uuid.UUID):
    async with get_db() as db:
        return await StatsService(db).night_details(night_id)
