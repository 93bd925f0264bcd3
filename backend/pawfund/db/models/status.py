"""Module: status."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pawfund.db.base import Base

# Medical/vaccination record that can be linked to pets through pet_statuses.
class Status(Base):
    __tablename__ = "statuses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    disease: Mapped[str] = mapped_column(String, nullable=False, default="")
    vaccine: Mapped[str] = mapped_column(String, nullable=False, default="")
