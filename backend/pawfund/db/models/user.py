"""Module: user."""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from pawfund.db.base import Base

# Donor accounts. total_donation is a cached running total owned by the donation ledger.
class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    location: Mapped[str] = mapped_column(String, nullable=True)
    phone: Mapped[str] = mapped_column(String, nullable=True)

    total_donation: Mapped[Decimal | None] = mapped_column(
        Numeric(14, 2),
        nullable=True,
        default=Decimal("0"),
    )
