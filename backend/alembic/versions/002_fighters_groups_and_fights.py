"""Add fighters_group and fight tables for generated trees

Revision ID: 002_tree_tables
Revises: 001_initial
Create Date: 2026-10-09 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "002_tree_tables"
down_revision = "001_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "fighters_group",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("championship_id", sa.Integer(), nullable=False),
        sa.Column("round", sa.Integer(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("stage", sa.String(), nullable=False),
        sa.Column("strategy", sa.String(), nullable=False),
        sa.Column("entrant_ids", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["championship_id"],
            ["championship.id"],
        ),
        sa.UniqueConstraint("championship_id", "round", "order", name="uq_group_round_order"),
    )
    op.create_index("ix_fighters_group_championship_id", "fighters_group", ["championship_id"])
    op.create_index("ix_fighters_group_round", "fighters_group", ["round"])

    op.create_table(
        "fight",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("fighters_group_id", sa.Integer(), nullable=False),
        sa.Column("championship_id", sa.Integer(), nullable=False),
        sa.Column("round", sa.Integer(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("is_bye", sa.Boolean(), nullable=False),
        sa.Column("entrant_a_id", sa.Integer(), nullable=True),
        sa.Column("entrant_b_id", sa.Integer(), nullable=True),
        sa.Column("entrant_kind", sa.String(), nullable=False),
        sa.Column("source_fight_a_id", sa.Integer(), nullable=True),
        sa.Column("source_fight_b_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["fighters_group_id"],
            ["fighters_group.id"],
        ),
        sa.ForeignKeyConstraint(
            ["championship_id"],
            ["championship.id"],
        ),
        sa.ForeignKeyConstraint(
            ["source_fight_a_id"],
            ["fight.id"],
        ),
        sa.ForeignKeyConstraint(
            ["source_fight_b_id"],
            ["fight.id"],
        ),
        sa.UniqueConstraint("championship_id", "round", "sequence", name="uq_fight_round_sequence"),
    )
    op.create_index("ix_fight_fighters_group_id", "fight", ["fighters_group_id"])
    op.create_index("ix_fight_championship_id", "fight", ["championship_id"])


def downgrade() -> None:
    op.drop_index("ix_fight_championship_id", table_name="fight")
    op.drop_index("ix_fight_fighters_group_id", table_name="fight")
    op.drop_table("fight")
    op.drop_index("ix_fighters_group_round", table_name="fighters_group")
    op.drop_index("ix_fighters_group_championship_id", table_name="fighters_group")
    op.drop_table("fighters_group")
