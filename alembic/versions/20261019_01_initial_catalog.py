"""
Initial catalog schema.

- roles / users (accounts)
- movies / genres / movie_genres (TMDB catalog)
- ratings / reviews / wishlist_items (user activity)
- Seed the default `user` role used by signup.
"""

import uuid

from alembic import op
import sqlalchemy as sa

# Revision identifiers, used by Alembic.
revision = "20261019_01_initial_catalog"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # --- Accounts ---
    roles = op.create_table(
        "roles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=32), nullable=False),
        sa.CheckConstraint("length(trim(name)) > 0", name="ck_roles_name_not_blank"),
        sa.PrimaryKeyConstraint("id", name="pk_roles"),
        sa.UniqueConstraint("name", name="uq_roles_name"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("avatar_url", sa.String(length=2048), nullable=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("email = lower(email)", name="ck_users_email_lowercase"),
        sa.CheckConstraint("length(trim(name)) > 0", name="ck_users_name_not_blank"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], name="fk_users_role_id_roles", ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role_id", "users", ["role_id"], unique=False)

    # --- Catalog ---
    op.create_table(
        "movies",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tmdb_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("poster_url", sa.String(length=2048), nullable=True),
        sa.Column("backdrop_url", sa.String(length=2048), nullable=True),
        sa.Column("popularity", sa.Float(), nullable=True),
        sa.Column("rating_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("average_rating", sa.Float(), server_default=sa.text("0"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("rating_count >= 0", name="ck_movies_rating_count_nonneg"),
        sa.CheckConstraint(
            "rating_count = 0 OR (average_rating >= 1 AND average_rating <= 5)",
            name="ck_movies_average_rating_range",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_movies"),
        sa.UniqueConstraint("tmdb_id", name="uq_movies_tmdb_id"),
    )
    op.create_index("ix_movies_popularity_id", "movies", ["popularity", "id"], unique=False)

    op.create_table(
        "genres",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=80), nullable=False),
        sa.CheckConstraint("length(trim(name)) > 0", name="ck_genres_name_not_blank"),
        sa.PrimaryKeyConstraint("id", name="pk_genres"),
    )

    op.create_table(
        "movie_genres",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("movie_id", sa.Uuid(), nullable=False),
        sa.Column("genre_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["movie_id"], ["movies.id"], name="fk_movie_genres_movie_id_movies", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["genre_id"], ["genres.id"], name="fk_movie_genres_genre_id_genres", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_movie_genres"),
        sa.UniqueConstraint("movie_id", "genre_id", name="uq_movie_genres_movie_genre"),
    )
    op.create_index("ix_movie_genres_genre", "movie_genres", ["genre_id"], unique=False)

    # --- User activity ---
    op.create_table(
        "ratings",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("movie_id", sa.Uuid(), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("value BETWEEN 1 AND 5", name="ck_ratings_value_range"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_ratings_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["movie_id"], ["movies.id"], name="fk_ratings_movie_id_movies", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "movie_id", name="pk_ratings"),
    )
    op.create_index("ix_ratings_movie", "ratings", ["movie_id"], unique=False)

    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("movie_id", sa.Uuid(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_spoiler", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("length(content) BETWEEN 3 AND 2000", name="ck_reviews_content_len"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_reviews_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["movie_id"], ["movies.id"], name="fk_reviews_movie_id_movies", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_reviews"),
        sa.UniqueConstraint("user_id", "movie_id", name="uq_reviews_user_movie"),
    )
    op.create_index("ix_reviews_user_id", "reviews", ["user_id"], unique=False)
    op.create_index("ix_reviews_movie_created_id", "reviews", ["movie_id", "created_at", "id"], unique=False)

    op.create_table(
        "wishlist_items",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("movie_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_wishlist_items_user_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["movie_id"], ["movies.id"], name="fk_wishlist_items_movie_id_movies", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "movie_id", name="pk_wishlist_items"),
    )
    op.create_index("ix_wishlist_user_created", "wishlist_items", ["user_id", "created_at"], unique=False)

    # --- Seed: default signup role ---
    op.bulk_insert(roles, [{"id": uuid.uuid4(), "name": "user"}])


def downgrade() -> None:
    op.drop_index("ix_wishlist_user_created", table_name="wishlist_items")
    op.drop_table("wishlist_items")
    op.drop_index("ix_reviews_movie_created_id", table_name="reviews")
    op.drop_index("ix_reviews_user_id", table_name="reviews")
    op.drop_table("reviews")
    op.drop_index("ix_ratings_movie", table_name="ratings")
    op.drop_table("ratings")
    op.drop_index("ix_movie_genres_genre", table_name="movie_genres")
    op.drop_table("movie_genres")
    op.drop_table("genres")
    op.drop_index("ix_movies_popularity_id", table_name="movies")
    op.drop_table("movies")
    op.drop_index("ix_users_role_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_table("roles")
