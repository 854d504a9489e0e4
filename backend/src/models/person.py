from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class Person(Base):
    __tablename__ = "persons"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    views: Mapped[list["MovieView"]] = relationship(back_populates="person")  # noqa: F821
