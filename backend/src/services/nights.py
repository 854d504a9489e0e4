import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ValidationFailure, store_errors
from models.night import MovieView, Night

logger = logging.getLogger(__name__)


class NightRecorder:
    """Records a night and every view of it in one transaction.

    The views are flushed one at a time: a session owns a single connection
    and only one statement may be in flight on it.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_night(
        self,
        participants: list[uuid.UUID],
        movie_id: uuid.UUID,
        time: datetime | None = None,
        description: str | None = None,
    ) -> dict[uuid.UUID, uuid.UUID]:
        """Record a single-movie night.

        Returns a mapping of person id -> view id, which the caller needs to
        submit ratings.
        """
        if not participants:
            raise ValidationFailure("A night needs at least one participant")

        views = await self._record(
            [(movie_id, person_id) for person_id in participants],
            movie_id=movie_id,
            time=time,
            description=description,
        )
        return {person_id: view_id for (_, person_id), view_id in views.items()}

    async def create_night_with_views(
        self,
        views: list[tuple[uuid.UUID, uuid.UUID]],
        time: datetime | None = None,
        description: str | None = None,
    ) -> dict[tuple[uuid.UUID, uuid.UUID], uuid.UUID]:
        """Record a night where several movies were watched.

        `views` holds (movie id, person id) pairs. Returns a mapping of each
        pair to its view id.
        """
        if not views:
            raise ValidationFailure("A night needs at least one view")
        return await self._record(views, movie_id=None, time=time, description=description)

    async def _record(
        self,
        views: list[tuple[uuid.UUID, uuid.UUID]],
        movie_id: uuid.UUID | None,
        time: datetime | None,
        description: str | None,
    ) -> dict[tuple[uuid.UUID, uuid.UUID], uuid.UUID]:
        night = Night(
            id=uuid.uuid4(),
            movie_id=movie_id,
            time=time or datetime.now(timezone.utc),
            description=description,
        )
        night_id = night.id
        view_ids: dict[tuple[uuid.UUID, uuid.UUID], uuid.UUID] = {}

        try:
            with store_errors():
                self.db.add(night)
                await self.db.flush()

                for view_movie_id, person_id in views:
                    view = MovieView(
                        id=uuid.uuid4(),
                        night_id=night_id,
                        movie_id=view_movie_id,
                        person_id=person_id,
                    )
                    self.db.add(view)
                    await self.db.flush()
                    view_ids[(view_movie_id, person_id)] = view.id

                await self.db.commit()
        except Exception:
            with store_errors():
                await self.db.rollback()
            logger.warning("Night %s rolled back, no views recorded", night_id)
            raise

        logger.info("Recorded night %s with %d view(s)", night_id, len(view_ids))
        return view_ids
