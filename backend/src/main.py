import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.health import router as health_router
from api.movies import router as movies_router
from api.nights import router as nights_router
from api.persons import router as persons_router
from api.ratings import router as ratings_router
from api.watchlists import router as watchlists_router
from config import settings
from core.database import engine, init_models

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models(engine)
    logger.info("Database ready: %s", engine.url.render_as_string(hide_password=True))

    yield
    await engine.dispose()


app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(movies_router)
app.include_router(nights_router)
app.include_router(persons_router)
app.include_router(ratings_router)
app.include_router(watchlists_router)
