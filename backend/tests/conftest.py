import os

# Set env vars BEFORE any imports from the project happen
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("APP_NAME", "moviedb-test")

import pytest  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.database import build_engine, build_session_factory, init_models  # noqa: E402
from services.catalog import CatalogService  # noqa: E402


@pytest.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def inception(db):
    return await CatalogService(db).create_movie("Inception", year_of_publication=2010)


@pytest.fixture
async def alice(db):
    return await CatalogService(db).create_person("Alice")


@pytest.fixture
async def bob(db):
    return await CatalogService(db).create_person("Bob")
