import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.errors import NotFoundError, ValidationFailure, store_errors
from models.movie import Movie
from models.person import Person
from models.watchlist import Watchlist

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationFailure("Name must not be empty")
    return name


def _paging(page: int, per_page: int | None) -> tuple[int, int]:
    """Turn a page number and size into (limit, offset)."""
    if per_page is None:
        per_page = settings.DEFAULT_PAGE_SIZE
    if page < 0:
        raise ValidationFailure("page must be >= 0")
    if not 1 <= per_page <= settings.MAX_PAGE_SIZE:
        raise ValidationFailure(f"per_page must be between 1 and {settings.MAX_PAGE_SIZE}")
    return per_page, page * per_page


class CatalogService:
    """Flat reads and inserts for movies, persons and watchlists."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_movie(
        self,
        name: str,
        tagline: str | None = None,
        cover_url: str | None = None,
        description: str | None = None,
        year_of_publication: int | None = None,
        duration_minutes: int | None = None,
        external_ref: str | None = None,
    ) -> Movie:
        if duration_minutes is not None and duration_minutes <= 0:
            raise ValidationFailure("duration_minutes must be positive")

        movie = Movie(
            name=_clean_name(name),
            tagline=tagline,
            cover_url=cover_url,
            description=description,
            year_of_publication=year_of_publication,
            duration_minutes=duration_minutes,
            external_ref=external_ref,
        )
        await self._insert(movie)
        logger.info("Created movie %s (%s)", movie.id, movie.name)
        return movie

    async def get_movie(self, movie_id: uuid.UUID) -> Movie:
        with store_errors():
            movie = await self.db.get(Movie, movie_id)
        if movie is None:
            raise NotFoundError("A movie with that id does not exist")
        return movie

    async def list_movies(
        self, name: str | None = None, page: int = 0, per_page: int | None = None
    ) -> list[Movie]:
        limit, offset = _paging(page, per_page)
        if name:
            stmt = select(Movie).where(func.upper(Movie.name).contains(name.upper(), autoescape=True))
        else:
            stmt = select(Movie)
        stmt = stmt.order_by(Movie.name, Movie.id).limit(limit).offset(offset)

        with store_errors():
            result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create_person(self, name: str) -> Person:
        person = Person(name=_clean_name(name))
        await self._insert(person)
        logger.info("Created person %s (%s)", person.id, person.name)
        return person

    async def get_person(self, person_id: uuid.UUID) -> Person:
        with store_errors():
            person = await self.db.get(Person, person_id)
        if person is None:
            raise NotFoundError("No person with that id found")
        return person

    async def list_persons(
        self, name: str | None = None, page: int = 0, per_page: int | None = None
    ) -> list[Person]:
        limit, offset = _paging(page, per_page)
        if name:
            stmt = select(Person).where(func.upper(Person.name).contains(name.upper(), autoescape=True))
        else:
            stmt = select(Person)
        stmt = stmt.order_by(Person.name, Person.id).limit(limit).offset(offset)

        with store_errors():
            result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create_watchlist(
        self,
        name: str,
        description: str | None = None,
        owner_id: uuid.UUID | None = None,
    ) -> Watchlist:
        watchlist = Watchlist(
            name=_clean_name(name), description=description, owner_id=owner_id
        )
        await self._insert(watchlist)
        logger.info("Created watchlist %s (%s)", watchlist.id, watchlist.name)
        return watchlist

    async def list_watchlists(
        self, page: int = 0, per_page: int | None = None
    ) -> list[Watchlist]:
        limit, offset = _paging(page, per_page)
        stmt = (
            select(Watchlist)
            .order_by(Watchlist.name, Watchlist.id)
            .limit(limit)
            .offset(offset)
        )
        with store_errors():
            result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _insert(self, row) -> None:
        self.db.add(row)
        try:
            with store_errors():
                await self.db.flush()
                await self.db.commit()
        except Exception:
            with store_errors():
                await self.db.rollback()
            raise
