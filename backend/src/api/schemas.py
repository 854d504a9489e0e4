import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class NewMovie(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    tagline: str | None = None
    cover_url: str | None = None
    description: str | None = None
    year_of_publication: int | None = None
    duration_minutes: int | None = Field(default=None, gt=0)
    external_ref: str | None = None


class NewPerson(CamelModel):
    name: str = Field(min_length=1, max_length=100)


class NewNight(CamelModel):
    time: datetime | None = None
    description: str | None = None
    persons: list[uuid.UUID] = Field(min_length=1)
    movie: uuid.UUID


class NewRating(CamelModel):
    view_id: uuid.UUID
    value: float
    time: datetime | None = None


class NewWatchlist(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    owner: uuid.UUID | None = None


class NewWatchlistEntry(CamelModel):
    movie: uuid.UUID
    index: int | None = Field(default=None, ge=0)


class Created(CamelModel):
    id: uuid.UUID


class MovieStub(CamelModel):
    id: uuid.UUID
    name: str


class PersonStub(CamelModel):
    id: uuid.UUID
    name: str


class WatchlistStub(CamelModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    owner_id: uuid.UUID | None = None


class NightStubWithRating(CamelModel):
    id: uuid.UUID
    time: datetime
    avg_rating: float | None = None


class MovieDetails(CamelModel):
    id: uuid.UUID
    name: str
    tagline: str | None = None
    cover_url: str | None = None
    description: str | None = None
    year_of_publication: int | None = None
    duration_minutes: int | None = None
    external_ref: str | None = None
    nights: list[NightStubWithRating]
    avg_rating: float | None = None


class PersonStubWithRating(CamelModel):
    id: uuid.UUID
    name: str
    avg_rating: float | None = None
    rating_count: int


class NightDetails(CamelModel):
    id: uuid.UUID
    time: datetime
    description: str | None = None
    movie: MovieStub | None = None
    persons: list[PersonStubWithRating]


class NightStubWithMovie(CamelModel):
    id: uuid.UUID
    time: datetime
    movie: MovieStub | None = None
    movies: list[MovieStub]


class PersonDetails(CamelModel):
    id: uuid.UUID
    name: str
    latest_nights: list[NightStubWithMovie]


class WatchlistEntryOut(CamelModel):
    index: int
    movie: MovieStub


class WatchlistDetails(CamelModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    owner_id: uuid.UUID | None = None
    entries: list[WatchlistEntryOut]
