"""Component ORM model. Generated artifact of a completed workflow."""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy import true as sa_true
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import ComponentCategory
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CreatedAtMixin, IntegerIdMixin


class Component(IntegerIdMixin, CreatedAtMixin, Base):
    """Generated software component. Table: component.

    Many components may reference one workflow; deleting a component never
    touches its workflow.
    """

    __tablename__ = "component"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    component_type: Mapped[str] = mapped_column(String(64), nullable=False)
    selector: Mapped[str] = mapped_column(String(255), nullable=False)
    template_code: Mapped[str] = mapped_column(Text, nullable=False)
    style_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    test_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    dependencies: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    inputs: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    outputs: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    version: Mapped[str] = mapped_column(String(64), nullable=False)
    created_by: Mapped[str] = mapped_column(String(255), nullable=False)
    workflow_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("workflow.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa_true()
    )
    # "metadata" is reserved on declarative classes.
    component_metadata: Mapped[str | None] = mapped_column(
        "metadata", Text, nullable=True
    )

    __table_args__ = (
        CheckConstraint(
            "category IN ({})".format(
                ", ".join("'{}'".format(v) for v in ComponentCategory.values())
            ),
            name="component_category_check",
        ),
        Index("ix_component_category_active", "category", "is_active"),
    )
