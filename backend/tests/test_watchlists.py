import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select

from core.errors import ConsistencyViolation, ConstraintViolation, NotFoundError, ValidationFailure
from models.watchlist import WatchlistEntry
from services.catalog import CatalogService
from services.watchlists import WatchlistService


@pytest.fixture
async def weekend(db):
    return await CatalogService(db).create_watchlist("Weekend")


@pytest.fixture
async def movies(db):
    catalog = CatalogService(db)
    return [await catalog.create_movie(name) for name in ("Alien", "Brazil", "Casablanca")]


async def test_auto_index_starts_at_zero(db, weekend, movies):
    service = WatchlistService(db)
    assert await service.add_entry(weekend.id, movies[0].id) == 0
    assert await service.add_entry(weekend.id, movies[1].id) == 1


async def test_auto_index_follows_explicit_max(db, weekend, movies):
    service = WatchlistService(db)
    assert await service.add_entry(weekend.id, movies[0].id) == 0
    assert await service.add_entry(weekend.id, movies[1].id, index=5) == 5
    # auto index is max+1 over all entries, not a count of auto-indexed adds
    assert await service.add_entry(weekend.id, movies[2].id) == 6


async def test_auto_index_is_per_watchlist(db, weekend, movies):
    other = await CatalogService(db).create_watchlist("Horror")
    service = WatchlistService(db)
    await service.add_entry(weekend.id, movies[0].id)
    await service.add_entry(weekend.id, movies[1].id)

    assert await service.add_entry(other.id, movies[2].id) == 0


async def test_explicit_index_collision_rejected(db, weekend, movies):
    service = WatchlistService(db)
    await service.add_entry(weekend.id, movies[0].id, index=2)
    with pytest.raises(ConstraintViolation):
        await service.add_entry(weekend.id, movies[1].id, index=2)

    count = await db.scalar(select(func.count()).select_from(WatchlistEntry))
    assert count == 1


async def test_negative_index_rejected(db, weekend, movies):
    with pytest.raises(ValidationFailure):
        await WatchlistService(db).add_entry(weekend.id, movies[0].id, index=-1)


async def test_unknown_watchlist_not_found(db, movies):
    movie_id = movies[0].id
    service = WatchlistService(db)
    with pytest.raises(NotFoundError):
        await service.add_entry(uuid.uuid4(), movie_id)
    with pytest.raises(NotFoundError):
        await service.add_entry(uuid.uuid4(), movie_id, index=0)

    count = await db.scalar(select(func.count()).select_from(WatchlistEntry))
    assert count == 0


async def test_weekend_scenario(db, weekend, movies):
    service = WatchlistService(db)
    assert await service.add_entry(weekend.id, movies[0].id) == 0
    assert await service.add_entry(weekend.id, movies[1].id) == 1

    await service.remove_entry(weekend.id, 0)

    watchlist = await service.get_watchlist(weekend.id)
    assert watchlist["name"] == "Weekend"
    assert watchlist["entries"] == [
        {"index": 1, "movie": {"id": movies[1].id, "name": "Brazil"}}
    ]


async def test_entries_ordered_by_index(db, weekend, movies):
    service = WatchlistService(db)
    await service.add_entry(weekend.id, movies[0].id, index=7)
    await service.add_entry(weekend.id, movies[1].id, index=3)
    await service.add_entry(weekend.id, movies[2].id)

    entries = (await service.get_watchlist(weekend.id))["entries"]
    assert [(e["index"], e["movie"]["name"]) for e in entries] == [
        (3, "Brazil"),
        (7, "Alien"),
        (8, "Casablanca"),
    ]


async def test_remove_missing_entry_mutates_nothing(db, weekend, movies):
    weekend_id = weekend.id
    service = WatchlistService(db)
    await service.add_entry(weekend_id, movies[0].id)

    with pytest.raises(NotFoundError):
        await service.remove_entry(weekend_id, 4)

    entries = (await service.get_watchlist(weekend_id))["entries"]
    assert len(entries) == 1


async def test_get_unknown_watchlist(db):
    with pytest.raises(NotFoundError):
        await WatchlistService(db).get_watchlist(uuid.uuid4())


async def test_remove_matching_several_rows_is_consistency_violation():
    result = MagicMock()
    result.rowcount = 2
    db = AsyncMock()
    db.execute = AsyncMock(return_value=result)

    with pytest.raises(ConsistencyViolation):
        await WatchlistService(db).remove_entry(uuid.uuid4(), 0)
    db.rollback.assert_awaited_once()
    db.commit.assert_not_awaited()
