"""initial_workflow_component_schema

Revision ID: a3f1c9e2d7b4
Revises:
Create Date: 2026-10-19 09:12:41.118204

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a3f1c9e2d7b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_WORKFLOW_STATUSES = (
    "DRAFT",
    "PENDING_APPROVAL",
    "APPROVED",
    "REJECTED",
    "IN_PROGRESS",
    "COMPLETED",
    "FAILED",
)
_CATEGORIES = (
    "ENGINE_MANAGEMENT",
    "SAFETY_SYSTEM",
    "INFOTAINMENT",
    "DIAGNOSTIC",
    "POWERTRAIN",
    "CHASSIS_CONTROL",
    "BODY_ELECTRONICS",
    "TELEMATICS",
)
_STEP_TYPES = (
    "VALIDATION",
    "CODE_GENERATION",
    "FILE_CREATION",
    "DEPENDENCY_CHECK",
    "APPROVAL",
    "NOTIFICATION",
    "TESTING",
    "DEPLOYMENT",
)
_STEP_STATUSES = ("PENDING", "IN_PROGRESS", "COMPLETED", "FAILED", "SKIPPED")


def _in(column: str, values: tuple[str, ...]) -> str:
    return "{} IN ({})".format(column, ", ".join(f"'{v}'" for v in values))


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "workflow",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("component_name", sa.String(length=255), nullable=False),
        sa.Column("component_type", sa.String(length=64), nullable=False),
        sa.Column("dependencies", sa.JSON(), nullable=False),
        sa.Column("validation_rules", sa.JSON(), nullable=False),
        sa.Column("template_name", sa.String(length=64), nullable=False),
        sa.Column("configuration", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(length=255), nullable=False),
        sa.Column("approved_by", sa.String(length=255), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rejected_by", sa.String(length=255), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint(_in("status", _WORKFLOW_STATUSES), name="workflow_status_check"),
        sa.CheckConstraint(_in("category", _CATEGORIES), name="workflow_category_check"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_workflow_status", "workflow", ["status"])
    op.create_index("ix_workflow_category", "workflow", ["category"])
    op.create_index("ix_workflow_status_created_at", "workflow", ["status", "created_at"])

    op.create_table(
        "workflow_step",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("workflow_id", sa.Integer(), nullable=False),
        sa.Column("step_order", sa.Integer(), nullable=False),
        sa.Column("step_name", sa.String(length=255), nullable=False),
        sa.Column("step_description", sa.Text(), nullable=True),
        sa.Column("step_type", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("configuration", sa.Text(), nullable=True),
        sa.Column("executed_by", sa.String(length=255), nullable=True),
        sa.Column("executed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("result", sa.Text(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.CheckConstraint(_in("step_type", _STEP_TYPES), name="workflow_step_type_check"),
        sa.CheckConstraint(_in("status", _STEP_STATUSES), name="workflow_step_status_check"),
        sa.CheckConstraint(
            "result IS NULL OR error_message IS NULL",
            name="workflow_step_result_xor_error",
        ),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflow.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("workflow_id", "step_order", name="uq_workflow_step_order"),
    )
    op.create_index("ix_workflow_step_workflow_id", "workflow_step", ["workflow_id"])

    op.create_table(
        "component",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("component_type", sa.String(length=64), nullable=False),
        sa.Column("selector", sa.String(length=255), nullable=False),
        sa.Column("template_code", sa.Text(), nullable=False),
        sa.Column("style_code", sa.Text(), nullable=True),
        sa.Column("test_code", sa.Text(), nullable=True),
        sa.Column("dependencies", sa.JSON(), nullable=False),
        sa.Column("inputs", sa.JSON(), nullable=False),
        sa.Column("outputs", sa.JSON(), nullable=False),
        sa.Column("version", sa.String(length=64), nullable=False),
        sa.Column("created_by", sa.String(length=255), nullable=False),
        sa.Column("workflow_id", sa.Integer(), nullable=False),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.true(), nullable=False
        ),
        sa.Column("metadata", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint(_in("category", _CATEGORIES), name="component_category_check"),
        sa.ForeignKeyConstraint(["workflow_id"], ["workflow.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_component_name", "component", ["name"])
    op.create_index("ix_component_category", "component", ["category"])
    op.create_index("ix_component_workflow_id", "component", ["workflow_id"])
    op.create_index(
        "ix_component_category_active", "component", ["category", "is_active"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_component_category_active", table_name="component")
    op.drop_index("ix_component_workflow_id", table_name="component")
    op.drop_index("ix_component_category", table_name="component")
    op.drop_index("ix_component_name", table_name="component")
    op.drop_table("component")
    op.drop_index("ix_workflow_step_workflow_id", table_name="workflow_step")
    op.drop_table("workflow_step")
    op.drop_index("ix_workflow_status_created_at", table_name="workflow")
    op.drop_index("ix_workflow_category", table_name="workflow")
    op.drop_index("ix_workflow_status", table_name="workflow")
    op.drop_table("workflow")
