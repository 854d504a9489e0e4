from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class Movie(Base):
    __tablename__ = "movies"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    tagline: Mapped[str | None] = mapped_column(String(500), nullable=True)
    cover_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    year_of_publication: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # Reference into an external catalogue the movie was imported from
    external_ref: Mapped[str | None] = mapped_column(String(100), nullable=True)

    views: Mapped[list["MovieView"]] = relationship(back_populates="movie")  # noqa: F821
