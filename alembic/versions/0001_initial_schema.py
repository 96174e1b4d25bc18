"""Initial schema: users, clients, assessment types, assessments and scores

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True)


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def _updated_at() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def upgrade() -> None:
    op.create_table(
        "user",
        _id_column(),
        sa.Column("open_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("login_method", sa.String(length=64), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="user"),
        _created_at(),
        _updated_at(),
        sa.Column("last_signed_in", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("open_id", name="uq_user_open_id"),
    )

    op.create_table(
        "client",
        _id_column(),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("company_name", sa.String(length=255), nullable=False),
        sa.Column("industry", sa.String(length=255), nullable=True),
        sa.Column("contact_name", sa.String(length=255), nullable=True),
        sa.Column("contact_email", sa.String(length=320), nullable=True),
        sa.Column("contact_phone", sa.String(length=50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        _updated_at(),
    )
    op.create_index("ix_client_user_id", "client", ["user_id"])

    op.create_table(
        "assessment_type",
        _id_column(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("total_questions", sa.Integer(), nullable=False),
        _created_at(),
        sa.UniqueConstraint("name", name="uq_assessment_type_name"),
    )

    op.create_table(
        "question",
        _id_column(),
        sa.Column("assessment_type_id", sa.Integer(), nullable=False),
        sa.Column("criterion_number", sa.Integer(), nullable=False),
        sa.Column("criterion_name", sa.String(length=100), nullable=False),
        sa.Column("question_number", sa.Integer(), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        _created_at(),
    )
    op.create_index("ix_question_assessment_type_id", "question", ["assessment_type_id"])

    op.create_table(
        "assessment",
        _id_column(),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column("assessment_type_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="in_progress"),
        sa.Column("started_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_score", sa.Float(), nullable=True),
        _created_at(),
        _updated_at(),
    )
    op.create_index("ix_assessment_client_id", "assessment", ["client_id"])
    op.create_index("ix_assessment_user_id", "assessment", ["user_id"])

    op.create_table(
        "answer",
        _id_column(),
        sa.Column("assessment_id", sa.Integer(), nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        _updated_at(),
        sa.UniqueConstraint("assessment_id", "question_id", name="uq_answer_assessment_question"),
    )
    op.create_index("ix_answer_assessment_id", "answer", ["assessment_id"])

    op.create_table(
        "criterion_score",
        _id_column(),
        sa.Column("assessment_id", sa.Integer(), nullable=False),
        sa.Column("criterion_number", sa.Integer(), nullable=False),
        sa.Column("criterion_name", sa.String(length=100), nullable=False),
        sa.Column("average_score", sa.Float(), nullable=False),
        sa.Column("total_questions", sa.Integer(), nullable=False),
        sa.Column("answered_questions", sa.Integer(), nullable=False),
        _created_at(),
        sa.UniqueConstraint("assessment_id", "criterion_number", name="uq_criterion_score_assessment_criterion"),
    )
    op.create_index("ix_criterion_score_assessment_id", "criterion_score", ["assessment_id"])

    op.create_table(
        "report",
        _id_column(),
        sa.Column("assessment_id", sa.Integer(), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("file_key", sa.Text(), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=True),
        sa.Column("analysis_summary", sa.Text(), nullable=True),
        sa.Column("action_items", sa.Text(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_report_assessment_id", "report", ["assessment_id"])


def downgrade() -> None:
    op.drop_index("ix_report_assessment_id", table_name="report")
    op.drop_table("report")
    op.drop_index("ix_criterion_score_assessment_id", table_name="criterion_score")
    op.drop_table("criterion_score")
    op.drop_index("ix_answer_assessment_id", table_name="answer")
    op.drop_table("answer")
    op.drop_index("ix_assessment_user_id", table_name="assessment")
    op.drop_index("ix_assessment_client_id", table_name="assessment")
    op.drop_table("assessment")
    op.drop_index("ix_question_assessment_type_id", table_name="question")
    op.drop_table("question")
    op.drop_table("assessment_type")
    op.drop_index("ix_client_user_id", table_name="client")
    op.drop_table("client")
    op.drop_table("user")
