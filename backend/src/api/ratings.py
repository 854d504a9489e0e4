from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from api.schemas import NewRating
from core.database import get_db
from services.ratings import RatingRecorder

router = APIRouter(prefix="/rating", tags=["ratings"])


@router.post("", status_code=201, response_class=PlainTextResponse)
async def create_rating(rating: NewRating) -> str:
    async with get_db() as db:
        rating_id = await RatingRecorder(db).create_rating(
            view_id=rating.view_id, value=rating.value, time=rating.time
        )
    return str(rating_id)
