"""Module: reconcile_totals."""

import argparse
import logging

from pawfund.core.config import settings
from pawfund.core.logging_config import setup_logging
from pawfund.db.session import SessionLocal
from pawfund.db.unit_of_work import UnitOfWork
from pawfund.services.donation_service import DonationService

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compare cached donor/shelter totals with the donation ledger.",
    )
    parser.add_argument("--repair", action="store_true", help="rewrite drifted totals")
    args = parser.parse_args(argv)

    setup_logging(settings.log_level, settings.log_file)

    session = SessionLocal()
    try:
        service = DonationService(UnitOfWork(session))
        drift = service.repair_totals() if args.repair else service.find_total_drift()
    finally:
        session.close()

    for item in drift:
        print(f"{item.entity} {item.id}: cached={item.cached} actual={item.actual} delta={item.delta}")

    if not drift:
        logger.info("All running totals match the donation ledger")
        return 0
    # Unrepaired drift exits non-zero.
    return 0 if args.repair else 1


if __name__ == "__main__":
    raise SystemExit(main())
