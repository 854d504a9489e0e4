import uuid
from datetime import datetime, timezone

import pytest

from core.errors import NotFoundError
from services.catalog import CatalogService
from services.nights import NightRecorder
from services.ratings import RatingRecorder
from services.stats import StatsService


def _at(day: int) -> datetime:
    return datetime(2026, 3, day, 20, 0, tzinfo=timezone.utc)


async def test_inception_night_end_to_end(db, inception, alice, bob):
    views = await NightRecorder(db).create_night(
        [alice.id, bob.id], inception.id, time=_at(7)
    )
    ratings = RatingRecorder(db)
    await ratings.create_rating(views[alice.id], 8.5)
    await ratings.create_rating(views[bob.id], 7.0)

    stats = StatsService(db)
    night_id = (await stats.movie_details(inception.id))["nights"][0]["id"]
    night = await stats.night_details(night_id)

    assert night["movie"] == {"id": inception.id, "name": "Inception"}
    persons = {p["name"]: p for p in night["persons"]}
    assert persons["Alice"]["avg_rating"] == 8.5
    assert persons["Alice"]["rating_count"] == 1
    assert persons["Bob"]["avg_rating"] == 7.0

    movie = await stats.movie_details(inception.id)
    assert movie["name"] == "Inception"
    assert movie["year_of_publication"] == 2010
    assert len(movie["nights"]) == 1
    assert movie["nights"][0]["avg_rating"] == pytest.approx(7.75)
    assert movie["avg_rating"] == pytest.approx(7.75)


async def test_movie_without_ratings_has_no_average(db, inception, alice):
    stats = StatsService(db)
    movie = await stats.movie_details(inception.id)
    assert movie["avg_rating"] is None
    assert movie["nights"] == []

    await NightRecorder(db).create_night([alice.id], inception.id)
    movie = await stats.movie_details(inception.id)
    assert movie["avg_rating"] is None
    assert len(movie["nights"]) == 1
    assert movie["nights"][0]["avg_rating"] is None


async def test_multiple_ratings_per_view_all_count(db, inception, alice):
    views = await NightRecorder(db).create_night([alice.id], inception.id)
    ratings = RatingRecorder(db)
    await ratings.create_rating(views[alice.id], 9.0)
    await ratings.create_rating(views[alice.id], 5.0)  # hangover rating

    stats = StatsService(db)
    movie = await stats.movie_details(inception.id)
    assert movie["avg_rating"] == pytest.approx(7.0)

    night = await stats.night_details(movie["nights"][0]["id"])
    assert night["persons"][0]["avg_rating"] == pytest.approx(7.0)
    assert night["persons"][0]["rating_count"] == 2


async def test_movie_average_spans_nights(db, inception, alice, bob):
    recorder = NightRecorder(db)
    ratings = RatingRecorder(db)
    first = await recorder.create_night([alice.id], inception.id, time=_at(1))
    second = await recorder.create_night([alice.id, bob.id], inception.id, time=_at(8))
    await ratings.create_rating(first[alice.id], 4.0)
    await ratings.create_rating(second[alice.id], 8.0)
    await ratings.create_rating(second[bob.id], 9.0)

    movie = await StatsService(db).movie_details(inception.id)

    assert movie["avg_rating"] == pytest.approx(7.0)
    # newest night first
    assert [n["avg_rating"] for n in movie["nights"]] == [
        pytest.approx(8.5),
        pytest.approx(4.0),
    ]


async def test_other_movies_ratings_excluded(db, inception, alice):
    dune = await CatalogService(db).create_movie("Dune")
    recorder = NightRecorder(db)
    ratings = RatingRecorder(db)
    a = await recorder.create_night([alice.id], inception.id)
    b = await recorder.create_night([alice.id], dune.id)
    await ratings.create_rating(a[alice.id], 6.0)
    await ratings.create_rating(b[alice.id], 2.0)

    movie = await StatsService(db).movie_details(inception.id)
    assert movie["avg_rating"] == pytest.approx(6.0)


async def test_night_details_omits_unrated_participants(db, inception, alice, bob):
    views = await NightRecorder(db).create_night([alice.id, bob.id], inception.id)
    await RatingRecorder(db).create_rating(views[alice.id], 6.5)

    stats = StatsService(db)
    night_id = (await stats.movie_details(inception.id))["nights"][0]["id"]
    night = await stats.night_details(night_id)

    assert [p["name"] for p in night["persons"]] == ["Alice"]


async def test_multi_movie_night_has_no_single_movie(db, inception, alice):
    views = await NightRecorder(db).create_night_with_views([(inception.id, alice.id)])
    await RatingRecorder(db).create_rating(views[(inception.id, alice.id)], 7.0)

    stats = StatsService(db)
    night_id = (await stats.movie_details(inception.id))["nights"][0]["id"]
    night = await stats.night_details(night_id)
    assert night["movie"] is None
    assert night["persons"][0]["avg_rating"] == 7.0


async def test_person_details_latest_nights_newest_first(db, inception, alice, bob):
    dune = await CatalogService(db).create_movie("Dune")
    recorder = NightRecorder(db)
    await recorder.create_night([alice.id], inception.id, time=_at(1))
    await recorder.create_night([alice.id, bob.id], dune.id, time=_at(9))
    await recorder.create_night([bob.id], inception.id, time=_at(15))

    person = await StatsService(db).person_details(alice.id)

    assert person["name"] == "Alice"
    assert [n["movie"]["name"] for n in person["latest_nights"]] == ["Dune", "Inception"]
    times = [n["time"] for n in person["latest_nights"]]
    assert times == sorted(times, reverse=True)


async def test_person_details_limited(db, inception, alice):
    recorder = NightRecorder(db)
    for day in range(1, 16):
        await recorder.create_night([alice.id], inception.id, time=_at(day))

    stats = StatsService(db)
    person = await stats.person_details(alice.id)
    assert len(person["latest_nights"]) == 10
    assert person["latest_nights"][0]["time"].day == 15

    person = await stats.person_details(alice.id, limit=3)
    assert [n["time"].day for n in person["latest_nights"]] == [15, 14, 13]


async def test_person_without_nights(db, bob):
    person = await StatsService(db).person_details(bob.id)
    assert person["latest_nights"] == []


@pytest.mark.parametrize("method", ["movie_details", "night_details", "person_details"])
async def test_unknown_ids_not_found(db, method):
    with pytest.raises(NotFoundError):
        await getattr(StatsService(db), method)(uuid.uuid4())


async def test_person_details_lists_multi_movie_night_once(db, inception, alice):
    dune = await CatalogService(db).create_movie("Dune")
    recorder = NightRecorder(db)
    for day in (1, 2):
        await recorder.create_night([alice.id], inception.id, time=_at(day))
    await recorder.create_night_with_views(
        [(inception.id, alice.id), (dune.id, alice.id)], time=_at(9)
    )

    latest = (await StatsService(db).person_details(alice.id, limit=2))["latest_nights"]

    assert [n["time"].day for n in latest] == [9, 2]
    assert [m["name"] for m in latest[0]["movies"]] == ["Dune", "Inception"]
    assert latest[0]["movie"] is None
    assert latest[1]["movie"]["name"] == "Inception"
