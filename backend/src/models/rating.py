import uuid
from datetime import datetime

from sqlalchemy import DateTime, Double, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class Rating(Base):
    __tablename__ = "ratings"

    # No uniqueness on the view: a later "hangover" rating is legal
    movie_view_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("movie_views.id"), nullable=False, index=True
    )
    value: Mapped[float] = mapped_column(Double, nullable=False)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    movie_view: Mapped["MovieView"] = relationship(back_populates="ratings")  # noqa: F821
