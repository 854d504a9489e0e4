import uuid

from fastapi import APIRouter, Response
from fastapi.responses import PlainTextResponse

from api.schemas import NewWatchlist, NewWatchlistEntry, WatchlistDetails, WatchlistStub
from core.database import get_db
from services.catalog import CatalogService
from services.watchlists import WatchlistService

router = APIRouter(prefix="/watchlist", tags=["watchlists"])


@router.post("", status_code=201, response_class=PlainTextResponse)
async def create_watchlist(watchlist: NewWatchlist) -> str:
    async with get_db() as db:
        created = await CatalogService(db).create_watchlist(
            name=watchlist.name,
            description=watchlist.description,
            owner_id=watchlist.owner,
        )
    return str(created.id)


@router.get("", response_model=list[WatchlistStub])
async def list_watchlists(page: int = 0, per_page: int | None = None):
    async with get_db() as db:
        return await CatalogService(db).list_watchlists(page=page, per_page=per_page)


@router.get("/{watchlist_id}", response_model=WatchlistDetails)
async def get_watchlist(watchlist_id: uuid.UUID):
    async with get_db() as db:
        return await WatchlistService(db).get_watchlist(watchlist_id)


@router.post("/{watchlist_id}", response_model=int)
async def add_watchlist_entry(watchlist_id: uuid.UUID, entry: NewWatchlistEntry):
    async with get_db() as db:
        return await WatchlistService(db).add_entry(
            watchlist_id=watchlist_id, movie_id=entry.movie, index=entry.index
        )


@router.delete("/{watchlist_id}/{index}", status_code=204)
async def remove_watchlist_entry(watchlist_id: uuid.UUID, index: int):
    async with get_db() as db:
        await WatchlistService(db).remove_entry(watchlist_id=watchlist_id, index=index)
    return Response(status_code=204)
