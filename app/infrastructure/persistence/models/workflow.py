"""Workflow and WorkflowStep ORM models. Component-generation requests and their ordered steps."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domain.enums import ComponentCategory, StepStatus, StepType, WorkflowStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    IntegerIdMixin,
    TimestampMixin,
)


def _in_check(column: str, values: list[str]) -> str:
    return "{} IN ({})".format(
        column, ", ".join("'{}'".format(v.replace("'", "''")) for v in values)
    )


class Workflow(IntegerIdMixin, TimestampMixin, Base):
    """Workflow request. Table: workflow. Status moves only through the lifecycle controller."""

    __tablename__ = "workflow"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=WorkflowStatus.DRAFT.value, index=True
    )
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    component_name: Mapped[str] = mapped_column(String(255), nullable=False)
    component_type: Mapped[str] = mapped_column(
        String(64), nullable=False, default="component"
    )
    dependencies: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    validation_rules: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    template_name: Mapped[str] = mapped_column(String(64), nullable=False)
    configuration: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(String(255), nullable=False)
    approved_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    rejected_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    steps: Mapped[list[WorkflowStep]] = relationship(
        back_populates="workflow",
        cascade="all, delete-orphan",
        order_by="WorkflowStep.step_order",
        lazy="selectin",
    )

    # Optimistic lock: a flush against a stale version raises StaleDataError.
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint(
            _in_check("status", WorkflowStatus.values()),
            name="workflow_status_check",
        ),
        CheckConstraint(
            _in_check("category", ComponentCategory.values()),
            name="workflow_category_check",
        ),
        Index("ix_workflow_status_created_at", "status", "created_at"),
    )


class WorkflowStep(IntegerIdMixin, Base):
    """One ordered unit of execution. Table: workflow_step."""

    __tablename__ = "workflow_step"

    workflow_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("workflow.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    step_order: Mapped[int] = mapped_column(Integer, nullable=False)
    step_name: Mapped[str] = mapped_column(String(255), nullable=False)
    step_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    step_type: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=StepStatus.PENDING.value
    )
    configuration: Mapped[str | None] = mapped_column(Text, nullable=True)
    executed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    executed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    result: Mapped[str | None] = mapped_column(Text, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    workflow: Mapped[Workflow] = relationship(back_populates="steps")

    __table_args__ = (
        UniqueConstraint("workflow_id", "step_order", name="uq_workflow_step_order"),
        CheckConstraint(
            _in_check("step_type", StepType.values()),
            name="workflow_step_type_check",
        ),
        CheckConstraint(
            _in_check("status", StepStatus.values()),
            name="workflow_step_status_check",
        ),
        CheckConstraint(
            "result IS NULL OR error_message IS NULL",
            name="workflow_step_result_xor_error",
        ),
    )
