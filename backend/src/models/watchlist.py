import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class Watchlist(Base):
    __tablename__ = "watchlists"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("persons.id"), nullable=True
    )

    entries: Mapped[list["WatchlistEntry"]] = relationship(
        back_populates="watchlist", order_by="WatchlistEntry.position"
    )


class WatchlistEntry(Base):
    __tablename__ = "watchlist_entries"
    __table_args__ = (
        UniqueConstraint("watchlist_id", "position", name="uq_watchlist_position"),
    )

    watchlist_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("watchlists.id"), nullable=False
    )
    movie_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("movies.id"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    watchlist: Mapped["Watchlist"] = relationship(back_populates="entries")
    movie: Mapped["Movie"] = relationship()  # noqa: F821
