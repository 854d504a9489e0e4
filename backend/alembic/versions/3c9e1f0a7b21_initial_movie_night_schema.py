"""initial movie night schema

Revision ID: 3c9e1f0a7b21
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c9e1f0a7b21"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "movies",
        *_base_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("tagline", sa.String(500), nullable=True),
        sa.Column("cover_url", sa.String(1000), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("year_of_publication", sa.Integer(), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("external_ref", sa.String(100), nullable=True),
    )
    op.create_index("ix_movies_name", "movies", ["name"])

    op.create_table(
        "persons",
        *_base_columns(),
        sa.Column("name", sa.String(100), nullable=False),
    )
    op.create_index("ix_persons_name", "persons", ["name"])

    op.create_table(
        "nights",
        *_base_columns(),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("movie_id", sa.Uuid(), sa.ForeignKey("movies.id"), nullable=True),
    )

    op.create_table(
        "movie_views",
        *_base_columns(),
        sa.Column("night_id", sa.Uuid(), sa.ForeignKey("nights.id"), nullable=False),
        sa.Column("movie_id", sa.Uuid(), sa.ForeignKey("movies.id"), nullable=False),
        sa.Column("person_id", sa.Uuid(), sa.ForeignKey("persons.id"), nullable=False),
        sa.UniqueConstraint("night_id", "person_id", "movie_id", name="uq_movie_view"),
    )
    op.create_index("ix_movie_views_movie", "movie_views", ["movie_id"])
    op.create_index("ix_movie_views_person", "movie_views", ["person_id"])

    op.create_table(
        "ratings",
        *_base_columns(),
        sa.Column("movie_view_id", sa.Uuid(), sa.ForeignKey("movie_views.id"), nullable=False),
        sa.Column("value", sa.Double(), nullable=False),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_ratings_movie_view_id", "ratings", ["movie_view_id"])

    op.create_table(
        "watchlists",
        *_base_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("persons.id"), nullable=True),
    )

    op.create_table(
        "watchlist_entries",
        *_base_columns(),
        sa.Column("watchlist_id", sa.Uuid(), sa.ForeignKey("watchlists.id"), nullable=False),
        sa.Column("movie_id", sa.Uuid(), sa.ForeignKey("movies.id"), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.UniqueConstraint("watchlist_id", "position", name="uq_watchlist_position"),
    )


def downgrade() -> None:
    op.drop_table("watchlist_entries")
    op.drop_table("watchlists")
    op.drop_index("ix_ratings_movie_view_id", table_name="ratings")
    op.drop_table("ratings")
    op.drop_index("ix_movie_views_person", table_name="movie_views")
    op.drop_index("ix_movie_views_movie", table_name="movie_views")
    op.drop_table("movie_views")
    op.drop_table("nights")
    op.drop_index("ix_persons_name", table_name="persons")
    op.drop_table("persons")
    op.drop_index("ix_movies_name", table_name="movies")
    op.drop_table("movies")
