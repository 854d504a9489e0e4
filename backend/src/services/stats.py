import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.errors import NotFoundError, store_errors
from models.movie import Movie
from models.night import MovieView, Night
from models.person import Person
from models.rating import Rating

logger = logging.getLogger(__name__)


def _avg(value) -> float | None:
    # AVG over an empty set is NULL, keep it that way instead of 0
    return float(value) if value is not None else None


class StatsService:
    """Read-side aggregation over ratings -> views -> nights/movies/persons.

    Every average is a plain mean over all ratings reachable from the target,
    so a second rating of the same view counts as much as the first one.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def movie_details(self, movie_id: uuid.UUID) -> dict:
        with store_errors():
            movie = await self.db.get(Movie, movie_id)
            if movie is None:
                raise NotFoundError("A movie with that id does not exist")

            nights_query = (
                select(
                    Night.id,
                    Night.time,
                    func.avg(Rating.value).label("avg_rating"),
                )
                .join(MovieView, MovieView.night_id == Night.id)
                .outerjoin(Rating, Rating.movie_view_id == MovieView.id)
                .where(MovieView.movie_id == movie_id)
                .group_by(Night.id, Night.time)
                .order_by(Night.time.desc())
            )
            nights = (await self.db.execute(nights_query)).all()

            avg_rating = await self.db.scalar(
                select(func.avg(Rating.value))
                .join(MovieView, Rating.movie_view_id == MovieView.id)
                .where(MovieView.movie_id == movie_id)
            )

        return {
            "id": movie.id,
            "name": movie.name,
            "tagline": movie.tagline,
            "cover_url": movie.cover_url,
            "description": movie.description,
            "year_of_publication": movie.year_of_publication,
            "duration_minutes": movie.duration_minutes,
            "external_ref": movie.external_ref,
            "nights": [
                {"id": night_id, "time": time, "avg_rating": _avg(night_avg)}
                for night_id, time, night_avg in nights
            ],
            "avg_rating": _avg(avg_rating),
        }

    async def night_details(self, night_id: uuid.UUID) -> dict:
        with store_errors():
            row = (
                await self.db.execute(
                    select(Night, Movie.id, Movie.name)
                    .outerjoin(Movie, Night.movie_id == Movie.id)
                    .where(Night.id == night_id)
                )
            ).first()
            if row is None:
                raise NotFoundError("No night with that id found")
            night, movie_id, movie_name = row

            # Inner join through ratings: participants without a rating yet
            # are not listed.
            persons_query = (
                select(
                    Person.id,
                    Person.name,
                    func.avg(Rating.value).label("avg_rating"),
                    func.count(Rating.id).label("rating_count"),
                )
                .join(MovieView, MovieView.person_id == Person.id)
                .join(Rating, Rating.movie_view_id == MovieView.id)
                .where(MovieView.night_id == night_id)
                .group_by(Person.id, Person.name)
                .order_by(Person.name)
            )
            persons = (await self.db.execute(persons_query)).all()

        return {
            "id": night.id,
            "time": night.time,
            "description": night.description,
            "movie": {"id": movie_id, "name": movie_name} if movie_id else None,
            "persons": [
                {
                    "id": person_id,
                    "name": name,
                    "avg_rating": _avg(person_avg),
                    "rating_count": count,
                }
                for person_id, name, person_avg, count in persons
            ],
        }

    async def person_details(
        self, person_id: uuid.UUID, limit: int | None = None
    ) -> dict:
        if limit is None:
            limit = settings.PERSON_LATEST_NIGHTS

        with store_errors():
            person = await self.db.get(Person, person_id)
            if person is None:
                raise NotFoundError("No person with that id found")

            # Limit on distinct nights: a multi-movie night holds several
            # views of the same person.
            latest = (
                select(Night.id, Night.time)
                .join(MovieView, MovieView.night_id == Night.id)
                .where(MovieView.person_id == person_id)
                .group_by(Night.id, Night.time)
                .order_by(Night.time.desc(), Night.id)
                .limit(limit)
                .subquery()
            )
            query = (
                select(latest.c.id, latest.c.time, Movie.id, Movie.name)
                .select_from(latest)
                .join(MovieView, MovieView.night_id == latest.c.id)
                .join(Movie, MovieView.movie_id == Movie.id)
                .where(MovieView.person_id == person_id)
                .order_by(latest.c.time.desc(), latest.c.id, Movie.name)
            )
            rows = (await self.db.execute(query)).all()

        nights: dict[uuid.UUID, dict] = {}
        for night_id, time, movie_id, movie_name in rows:
            night = nights.setdefault(night_id, {"id": night_id, "time": time, "movies": []})
            night["movies"].append({"id": movie_id, "name": movie_name})
        for night in nights.values():
            # Single movie for the common case, None on multi-movie nights
            night["movie"] = night["movies"][0] if len(night["movies"]) == 1 else None

        return {
            "id": person.id,
            "name": person.name,
            "latest_nights": list(nights.values()),
        }
