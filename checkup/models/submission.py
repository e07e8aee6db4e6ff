from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import String, Text, Date, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from checkup.models.base import Base, ULIDMixin


class Submission(Base, ULIDMixin):
    __tablename__ = "submissions"

    reporter_name: Mapped[str] = mapped_column(String(150), index=True)
    branch_name: Mapped[str] = mapped_column(String(100))
    date_started: Mapped[date] = mapped_column(Date)
    date_ended: Mapped[date] = mapped_column(Date)
    submission_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    additional_comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    client_metadata: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    properties = relationship(
        "PropertyReport",
        back_populates="submission",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="PropertyReport.position",
    )


class PropertyReport(Base, ULIDMixin):
    __tablename__ = "property_reports"

    submission_id: Mapped[str] = mapped_column(String(26), ForeignKey("submissions.id"))
    position: Mapped[int] = mapped_column(default=0)
    property_id: Mapped[str] = mapped_column(String(100))
    property_name: Mapped[str] = mapped_column(String(255), default="")
    condition: Mapped[str] = mapped_column(String(30))  # Good | Needs Fixing | Not Available
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    photos: Mapped[list | None] = mapped_column(JSON, nullable=True)

    submission = relationship("Submission", back_populates="properties")
