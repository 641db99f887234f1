"""create sessions, presence_logs and attendance_records tables

Revision ID: 20251019120000
Revises: 
Create Date: 2025-10-19 12:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20251019120000"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("course_id", sa.String(length=64), nullable=False),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("required_presence_percentage", sa.Float(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    )
    op.create_index("ix_sessions_id", "sessions", ["id"])
    op.create_index("ix_sessions_course_id", "sessions", ["course_id"])

    op.create_table(
        "presence_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("device_identifier", sa.String(length=128), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("rssi", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["session_id"], ["sessions.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_presence_logs_id", "presence_logs", ["id"])
    op.create_index("ix_presence_logs_session_id", "presence_logs", ["session_id"])
    op.create_index(
        "ix_presence_logs_session_device_ts",
        "presence_logs",
        ["session_id", "device_identifier", "timestamp"],
    )

    op.create_table(
        "attendance_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("device_identifier", sa.String(length=128), nullable=False),
        sa.Column("cumulative_duration_ms", sa.BigInteger(), nullable=False),
        sa.Column("required_duration_ms", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("computed_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["session_id"], ["sessions.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_attendance_records_id", "attendance_records", ["id"])
    op.create_index("ix_attendance_records_session_id", "attendance_records", ["session_id"])
    op.create_index(
        "ix_attendance_records_session_device",
        "attendance_records",
        ["session_id", "device_identifier"],
    )


def downgrade() -> None:
    op.drop_table("attendance_records")
    op.drop_table("presence_logs")
    op.drop_table("sessions")
