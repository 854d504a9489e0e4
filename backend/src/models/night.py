import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class Night(Base):
    __tablename__ = "nights"

    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Only set for nights built around a single movie
    movie_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("movies.id"), nullable=True
    )

    views: Mapped[list["MovieView"]] = relationship(back_populates="night")


class MovieView(Base):
    __tablename__ = "movie_views"
    __table_args__ = (
        UniqueConstraint("night_id", "person_id", "movie_id", name="uq_movie_view"),
        Index("ix_movie_views_movie", "movie_id"),
        Index("ix_movie_views_person", "person_id"),
    )

    night_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("nights.id"), nullable=False
    )
    movie_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("movies.id"), nullable=False
    )
    person_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("persons.id"), nullable=False
    )

    night: Mapped["Night"] = relationship(back_populates="views")
    movie: Mapped["Movie"] = relationship(back_populates="views")  # noqa: F821
    person: Mapped["Person"] = relationship(back_populates="views")  # noqa: F821
    ratings: Mapped[list["Rating"]] = relationship(back_populates="movie_view")  # noqa: F821
