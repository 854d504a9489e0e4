import logging
import uuid

from sqlalchemy import Integer, Uuid, delete, func, insert, literal, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import (
    ConsistencyViolation,
    NotFoundError,
    ValidationFailure,
    store_errors,
)
from models.movie import Movie
from models.watchlist import Watchlist, WatchlistEntry

logger = logging.getLogger(__name__)


class WatchlistService:
    """Ordered watchlist entries keyed by (watchlist, index).

    Indices are never recompacted: removing an entry leaves a gap.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_entry(
        self,
        watchlist_id: uuid.UUID,
        movie_id: uuid.UUID,
        index: int | None = None,
    ) -> int:
        entry_id = uuid.uuid4()

        if index is not None:
            if index < 0:
                raise ValidationFailure("index must be >= 0")
            stmt = insert(WatchlistEntry.__table__).values(
                id=entry_id,
                watchlist_id=watchlist_id,
                movie_id=movie_id,
                position=index,
            )
        else:
            # max+1 is computed by the INSERT itself; two concurrent inserts
            # that still collide are rejected by uq_watchlist_position.
            next_position = (
                select(
                    literal(entry_id, Uuid),
                    literal(watchlist_id, Uuid),
                    literal(movie_id, Uuid),
                    func.coalesce(func.max(WatchlistEntry.position), -1) + literal(1, Integer),
                )
                .where(WatchlistEntry.watchlist_id == watchlist_id)
            )
            stmt = insert(WatchlistEntry.__table__).from_select(
                ["id", "watchlist_id", "movie_id", "position"], next_position
            )

        try:
            with store_errors():
                if await self.db.get(Watchlist, watchlist_id) is None:
                    raise NotFoundError("No watchlist with that id found")
                await self.db.execute(stmt)
                position = await self.db.scalar(
                    select(WatchlistEntry.position).where(WatchlistEntry.id == entry_id)
                )
                await self.db.commit()
        except Exception:
            with store_errors():
                await self.db.rollback()
            raise

        logger.info("Watchlist %s: movie %s at index %d", watchlist_id, movie_id, position)
        return position

    async def remove_entry(self, watchlist_id: uuid.UUID, index: int) -> None:
        stmt = delete(WatchlistEntry).where(
            WatchlistEntry.watchlist_id == watchlist_id,
            WatchlistEntry.position == index,
        )
        try:
            with store_errors():
                result = await self.db.execute(stmt)
                if result.rowcount == 0:
                    raise NotFoundError(f"No entry at index {index} in this watchlist")
                if result.rowcount > 1:
                    logger.error(
                        "Removing index %d from watchlist %s matched %d rows",
                        index,
                        watchlist_id,
                        result.rowcount,
                    )
                    raise ConsistencyViolation(
                        f"Watchlist index {index} is not unique ({result.rowcount} rows)"
                    )
                await self.db.commit()
        except Exception:
            with store_errors():
                await self.db.rollback()
            raise

        logger.info("Watchlist %s: removed index %d", watchlist_id, index)

    async def get_watchlist(self, watchlist_id: uuid.UUID) -> dict:
        with store_errors():
            watchlist = await self.db.get(Watchlist, watchlist_id)
            if watchlist is None:
                raise NotFoundError("No watchlist with that id found")

            rows = (
                await self.db.execute(
                    select(WatchlistEntry.position, Movie.id, Movie.name)
                    .join(Movie, WatchlistEntry.movie_id == Movie.id)
                    .where(WatchlistEntry.watchlist_id == watchlist_id)
                    .order_by(WatchlistEntry.position)
                )
            ).all()

        return {
            "id": watchlist.id,
            "name": watchlist.name,
            "description": watchlist.description,
            "owner_id": watchlist.owner_id,
            "entries": [
                {"index": position, "movie": {"id": movie_id, "name": movie_name}}
                for position, movie_id, movie_name in rows
            ],
        }
