"""Initial migration: create category, championship, competitor, team, championship_settings tables

Revision ID: 001_initial
Revises:
Create Date: 2026-10-02 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "category",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("is_team", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "championship",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tournament_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["category.id"],
        ),
        sa.UniqueConstraint("tournament_id", "category_id", name="uq_tournament_category"),
    )
    op.create_index("ix_championship_tournament_id", "championship", ["tournament_id"])

    op.create_table(
        "competitor",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("championship_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("seed", sa.Integer(), nullable=True),
        sa.Column("confirmed", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["championship_id"],
            ["championship.id"],
        ),
        sa.UniqueConstraint("championship_id", "user_id", name="uq_championship_user"),
    )
    op.create_index("ix_competitor_championship_id", "competitor", ["championship_id"])

    op.create_table(
        "team",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("championship_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("seed", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["championship_id"],
            ["championship.id"],
        ),
        sa.UniqueConstraint("championship_id", "name", name="uq_championship_team_name"),
    )
    op.create_index("ix_team_championship_id", "team", ["championship_id"])

    op.create_table(
        "championship_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("championship_id", sa.Integer(), nullable=False),
        sa.Column("tree_type", sa.String(), nullable=False),
        sa.Column("has_preliminary", sa.Boolean(), nullable=False),
        sa.Column("preliminary_group_size", sa.Integer(), nullable=False),
        sa.Column("advancing_per_group", sa.Integer(), nullable=False),
        sa.Column("alias", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["championship_id"],
            ["championship.id"],
        ),
    )
    op.create_index(
        "ix_championship_settings_championship_id", "championship_settings", ["championship_id"], unique=True
    )


def downgrade() -> None:
    op.drop_index("ix_championship_settings_championship_id", table_name="championship_settings")
    op.drop_table("championship_settings")
    op.drop_index("ix_team_championship_id", table_name="team")
    op.drop_table("team")
    op.drop_index("ix_competitor_championship_id", table_name="competitor")
    op.drop_table("competitor")
    op.drop_index("ix_championship_tournament_id", table_name="championship")
    op.drop_table("championship")
    op.drop_table("category")
