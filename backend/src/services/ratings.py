import logging
import math
import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.errors import ValidationFailure, store_errors
from models.rating import Rating

logger = logging.getLogger(__name__)


class RatingRecorder:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_rating(
        self,
        view_id: uuid.UUID,
        value: float,
        time: datetime | None = None,
    ) -> uuid.UUID:
        """Attach a rating to an existing view.

        Ratings are additive: a second rating for the same view counts
        alongside the first one. The view itself is not looked up here, the
        foreign key rejects unknown views.
        """
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ValidationFailure("Rating must be a number") from None
        if not math.isfinite(value):
            raise ValidationFailure("Rating must be a finite number")
        if not settings.RATING_MIN <= value <= settings.RATING_MAX:
            raise ValidationFailure(
                f"Rating must be between {settings.RATING_MIN:g} and {settings.RATING_MAX:g}"
            )

        rating = Rating(
            id=uuid.uuid4(),
            movie_view_id=view_id,
            value=value,
            time=time or datetime.now(timezone.utc),
        )
        try:
            with store_errors():
                self.db.add(rating)
                await self.db.flush()
                await self.db.commit()
        except Exception:
            with store_errors():
                await self.db.rollback()
            raise

        logger.info("Rating %s: %.1f on view %s", rating.id, value, view_id)
        return rating.id
