"""Module: donation_service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation

from sqlalchemy import func, select

from pawfund.core.errors import InvalidArgument, NotFound
from pawfund.db.models.donation import Donation
from pawfund.db.models.shelter import Shelter
from pawfund.db.models.user import User
from pawfund.db.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

DONOR_TOTAL = "total_donation"
SHELTER_TOTAL = "donation_amount"


# A cached running total that disagrees with the sum of its donations.
@dataclass(frozen=True)
class TotalDrift:
    entity: str
    id: int
    cached: Decimal
    actual: Decimal

    @property
    def delta(self) -> Decimal:
        return self.actual - self.cached


# -------------------------
# Helpers
# -------------------------
def _as_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT)


def _parse_amount(value) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidArgument(f"Invalid amount {value!r}", field="amount")

    if not amount.is_finite():
        raise InvalidArgument("Amount must be a finite number", field="amount")
    amount = amount.quantize(CENT)
    if amount <= 0:
        raise InvalidArgument("Amount must be greater than 0", field="amount")
    return amount


def _require_id(value, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgument(f"{field_name} must be greater than 0", field=field_name)
    return value


class DonationService:
    """
    Donation ledger.

    Every mutation runs inside one unit-of-work transaction that also moves
    the donor's ``total_donation`` and the shelter's ``donation_amount``, so
    a donation row and the running totals it feeds are committed or rolled
    back together. Totals are changed with an in-database increment on rows
    already locked with SELECT ... FOR UPDATE.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.donations = uow.repository(Donation)
        self.donors = uow.repository(User)
        self.shelters = uow.repository(Shelter)

    # -------------------------
    # Reads
    # -------------------------
    def list_all(self) -> list[Donation]:
        return self.donations.query(self.donations.as_queryable().order_by(Donation.id))

    def get_by_id(self, id: int) -> Donation:
        _require_id(id, "id")
        donation = self.donations.get_by_id(id)
        if donation is None:
            raise NotFound("donation", id)
        return donation

    def list_by_donor(self, donor_id: int) -> list[Donation]:
        _require_id(donor_id, "donor_id")
        stmt = (
            self.donations.as_queryable()
            .where(Donation.donor_id == donor_id)
            .order_by(Donation.id)
        )
        return self.donations.query(stmt)

    def total_by_shelter(self, shelter_id: int) -> Decimal:
        stmt = select(func.coalesce(func.sum(Donation.amount), 0)).where(
            Donation.shelter_id == shelter_id
        )
        return _as_decimal(self.donations.scalar(stmt))

    def total_by_donor(self, donor_id: int) -> Decimal:
        stmt = select(func.coalesce(func.sum(Donation.amount), 0)).where(
            Donation.donor_id == donor_id
        )
        return _as_decimal(self.donations.scalar(stmt))

    def find_total_drift(self) -> list[TotalDrift]:
        drift = []
        drift.extend(self._drift_for(User, DONOR_TOTAL, Donation.donor_id, "donor"))
        drift.extend(self._drift_for(Shelter, SHELTER_TOTAL, Donation.shelter_id, "shelter"))
        return drift

    # -------------------------
    # Mutations
    # -------------------------
    def create(self, amount, donor_id: int, shelter_id: int) -> Donation:
        amount = _parse_amount(amount)
        _require_id(donor_id, "donor_id")
        _require_id(shelter_id, "shelter_id")

        with self.uow.begin_transaction() as txn:
            # Lock the parties before inserting so a missing one surfaces as NotFound.
            self._lock_parties({donor_id}, {shelter_id})

            donation = self.donations.insert(
                Donation(
                    amount=amount,
                    date=datetime.now(UTC),
                    donor_id=donor_id,
                    shelter_id=shelter_id,
                )
            )
            self.donors.increment(donor_id, DONOR_TOTAL, amount)
            self.shelters.increment(shelter_id, SHELTER_TOTAL, amount)

            self.uow.commit()
            txn.commit()

        logger.info(
            "Donation %s created: donor=%s shelter=%s amount=%s",
            donation.id, donor_id, shelter_id, amount,
        )
        return donation

    def update(self, id: int, amount, donor_id: int, shelter_id: int) -> Donation:
        _require_id(id, "id")
        amount = _parse_amount(amount)
        _require_id(donor_id, "donor_id")
        _require_id(shelter_id, "shelter_id")

        with self.uow.begin_transaction() as txn:
            donation = self.donations.get_by_id(id, for_update=True)
            if donation is None:
                raise NotFound("donation", id)

            old_amount = _as_decimal(donation.amount)
            old_donor_id = donation.donor_id
            old_shelter_id = donation.shelter_id

            self._lock_parties({old_donor_id, donor_id}, {old_shelter_id, shelter_id})

            # Reverse the old contribution, then apply the new one.
            self.donors.increment(old_donor_id, DONOR_TOTAL, -old_amount)
            self.shelters.increment(old_shelter_id, SHELTER_TOTAL, -old_amount)
            self.donors.increment(donor_id, DONOR_TOTAL, amount)
            self.shelters.increment(shelter_id, SHELTER_TOTAL, amount)

            donation.amount = amount
            donation.donor_id = donor_id
            donation.shelter_id = shelter_id
            donation.date = datetime.now(UTC)
            self.donations.update(donation, donation.id)

            self.uow.commit()
            txn.commit()

        logger.info(
            "Donation %s updated: donor %s->%s shelter %s->%s amount %s->%s",
            id, old_donor_id, donor_id, old_shelter_id, shelter_id, old_amount, amount,
        )
        return donation

    def delete(self, id: int) -> None:
        _require_id(id, "id")

        with self.uow.begin_transaction() as txn:
            donation = self.donations.get_by_id(id, for_update=True)
            if donation is None:
                raise NotFound("donation", id)

            amount = _as_decimal(donation.amount)
            donor_id, shelter_id = donation.donor_id, donation.shelter_id
            self._lock_parties({donor_id}, {shelter_id})

            self.donors.increment(donor_id, DONOR_TOTAL, -amount)
            self.shelters.increment(shelter_id, SHELTER_TOTAL, -amount)
            self.donations.delete(donation)

            self.uow.commit()
            txn.commit()

        logger.info(
            "Donation %s deleted: donor=%s shelter=%s amount=%s",
            id, donor_id, shelter_id, amount,
        )

    def repair_totals(self) -> list[TotalDrift]:
        """Overwrite every drifted cached total with its recomputed sum."""
        with self.uow.begin_transaction() as txn:
            drift = self.find_total_drift()
            # Drift comes back donors first, ascending ids: the same order _lock_parties uses.
            for item in drift:
                if item.entity == "donor":
                    repo, column, fk = self.donors, DONOR_TOTAL, Donation.donor_id
                else:
                    repo, column, fk = self.shelters, SHELTER_TOTAL, Donation.shelter_id
                repo.get_by_id(item.id, for_update=True)
                # Summed by the UPDATE itself, so donations committed after the scan still count.
                ledger_sum = (
                    select(func.coalesce(func.sum(Donation.amount), 0))
                    .where(fk == item.id)
                    .scalar_subquery()
                )
                repo.assign(item.id, column, ledger_sum)

            self.uow.commit()
            txn.commit()

        if drift:
            logger.warning("Repaired %d drifted running total(s)", len(drift))
        return drift

    # -------------------------
    # Internals
    # -------------------------
    def _lock_parties(self, donor_ids: set[int], shelter_ids: set[int]) -> None:
        # Ascending id order, donors before shelters, keeps concurrent lockers from deadlocking.
        for donor_id in sorted(donor_ids):
            if self.donors.get_by_id(donor_id, for_update=True) is None:
                raise NotFound("donor", donor_id)
        for shelter_id in sorted(shelter_ids):
            if self.shelters.get_by_id(shelter_id, for_update=True) is None:
                raise NotFound("shelter", shelter_id)

    def _drift_for(self, model, column: str, fk, label: str) -> list[TotalDrift]:
        cached_col = getattr(model, column)
        stmt = (
            select(model.id, cached_col, func.coalesce(func.sum(Donation.amount), 0))
            .outerjoin(Donation, fk == model.id)
            .group_by(model.id, cached_col)
            .order_by(model.id)
        )
        out = []
        for row_id, cached, actual in self.uow.session.execute(stmt).all():
            cached, actual = _as_decimal(cached), _as_decimal(actual)
            if cached != actual:
                out.append(TotalDrift(entity=label, id=row_id, cached=cached, actual=actual))
        return out
