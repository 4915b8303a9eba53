"""create team and member tables

Revision ID: 4c1d2e3f5a6b
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4c1d2e3f5a6b"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "team",
        sa.Column("team_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("team_id"),
        sa.UniqueConstraint("name", name="uq_team_name"),
    )
    op.create_table(
        "member",
        sa.Column("member_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("team_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["team_id"], ["team.team_id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("member_id"),
    )
    # 검색 조건 컬럼 인덱스 — Indexes for the search filters
    op.create_index("ix_member_username", "member", ["username"])
    op.create_index("ix_member_team_id", "member", ["team_id"])


def downgrade() -> None:
    op.drop_index("ix_member_team_id", table_name="member")
    op.drop_index("ix_member_username", table_name="member")
    op.drop_table("member")
    op.drop_table("team")
