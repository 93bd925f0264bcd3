from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pawfund.db.base import Base
from pawfund.db.models.status import Status

# Join row between a pet and a status; the composite key makes each pair unique.
class PetStatus(Base):
    __tablename__ = "pet_statuses"

    pet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pets.id", ondelete="CASCADE"),
        primary_key=True
    )
    status_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("statuses.id", ondelete="CASCADE"),
        primary_key=True
    )

    status: Mapped[Status] = relationship(Status, lazy="select")
