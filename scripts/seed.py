"""Seed script to populate the database with sample data for testing."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend" / "src"))

from core.database import engine, get_db, init_models  # noqa: E402
from services.catalog import CatalogService  # noqa: E402
from services.nights import NightRecorder  # noqa: E402
from services.ratings import RatingRecorder  # noqa: E402
from services.watchlists import WatchlistService  # noqa: E402


async def seed():
    await init_models(engine)

    async with get_db() as db:
        catalog = CatalogService(db)

        persons = [
            await catalog.create_person(name)
            for name in ("Marie", "Paul", "Lucas")
        ]

        movies_data = [
            {"name": "Inception", "tagline": "Your mind is the scene of the crime.", "year_of_publication": 2010, "duration_minutes": 148},
            {"name": "Parasite", "year_of_publication": 2019, "duration_minutes": 132},
            {"name": "Dune", "year_of_publication": 2021, "duration_minutes": 155},
        ]
        movies = [await catalog.create_movie(**md) for md in movies_data]

        # One night per movie, everybody watching
        recorder = NightRecorder(db)
        nights = []
        for movie in movies:
            views = await recorder.create_night(
                participants=[p.id for p in persons],
                movie_id=movie.id,
                description=f"{movie.name} night",
            )
            nights.append(views)

        ratings_data = [
            (0, 0, 9.0), (0, 1, 8.0), (0, 2, 8.5),  # Inception
            (1, 0, 9.5), (1, 1, 9.0), (1, 2, 10.0),  # Parasite
            (2, 0, 7.5), (2, 1, 8.0), (2, 2, 6.5),  # Dune
        ]
        ratings = RatingRecorder(db)
        for ni, pi, value in ratings_data:
            await ratings.create_rating(nights[ni][persons[pi].id], value)

        watchlist = await catalog.create_watchlist("Weekend", description="Next up")
        entries = WatchlistService(db)
        for movie in reversed(movies):
            await entries.add_entry(watchlist.id, movie.id)

        print("Database seeded with sample data!")
        print(f"  {len(persons)} persons")
        print(f"  {len(movies)} movies")
        print(f"  {len(nights)} nights")
        print(f"  {len(ratings_data)} ratings")
        print(f"  1 watchlist with {len(movies)} entries")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
