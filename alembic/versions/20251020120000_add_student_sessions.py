"""add student_sessions table

Revision ID: 20251020120000
Revises: 20251019120000
Create Date: 2025-10-20 12:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20251020120000"
down_revision = "20251019120000"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "student_sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.String(length=64), nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("temporary_ble_identifier", sa.String(length=128), nullable=False),
        sa.Column(
            "enrolled_at",
            sa.DateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["session_id"], ["sessions.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "student_id", "session_id", name="uq_student_sessions_student_session"
        ),
    )
    op.create_index("ix_student_sessions_id", "student_sessions", ["id"])
    op.create_index("ix_student_sessions_student_id", "student_sessions", ["student_id"])
    op.create_index("ix_student_sessions_session_id", "student_sessions", ["session_id"])


def downgrade() -> None:
    op.drop_table("student_sessions")
