"""Repository and unit-of-work: staging, commit, rollback, failure mapping."""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from pawfund.core.errors import InvalidArgument, NotFound, StorageFailure
from pawfund.db.models import Donation, Shelter, User


def _count(session, model) -> int:
    return session.execute(select(func.count()).select_from(model)).scalar_one()


def test_insert_assigns_identity(uow):
    users = uow.repository(User)

    with uow.begin_transaction() as txn:
        user = users.insert(User(username="ann", email="ann@example.com"))
        assert user.id is not None
        txn.commit()


def test_repository_is_cached_per_model(uow):
    assert uow.repository(User) is uow.repository(User)
    assert uow.repository(User) is not uow.repository(Shelter)


def test_transaction_commit_persists_all_staged_writes(uow, session_factory):
    users = uow.repository(User)
    shelters = uow.repository(Shelter)

    with uow.begin_transaction() as txn:
        users.insert(User(username="ann", email="ann@example.com"))
        shelters.insert(Shelter(name="Happy Paws"))
        uow.commit()
        txn.commit()

    fresh = session_factory()
    try:
        assert _count(fresh, User) == 1
        assert _count(fresh, Shelter) == 1
    finally:
        fresh.close()


def test_explicit_rollback_discards_staged_writes(uow, session):
    users = uow.repository(User)

    txn = uow.begin_transaction()
    users.insert(User(username="ann", email="ann@example.com"))
    uow.commit()
    txn.rollback()

    assert _count(session, User) == 0
    assert not uow.in_transaction


def test_scope_exit_without_commit_rolls_back(uow, session):
    with uow.begin_transaction():
        uow.repository(User).insert(User(username="ann", email="ann@example.com"))

    assert _count(session, User) == 0
    assert not uow.in_transaction


def test_exception_inside_scope_rolls_back_and_propagates(uow, session):
    with pytest.raises(RuntimeError):
        with uow.begin_transaction():
            uow.repository(User).insert(User(username="ann", email="ann@example.com"))
            raise RuntimeError("boom")

    assert _count(session, User) == 0


def test_database_error_inside_scope_becomes_storage_failure(uow, session):
    with pytest.raises(StorageFailure) as exc_info:
        with uow.begin_transaction() as txn:
            # No such donor/shelter: the foreign keys reject the insert.
            uow.repository(Donation).insert(
                Donation(amount=Decimal("5"), donor_id=99, shelter_id=99)
            )
            txn.commit()

    assert exc_info.value.__cause__ is not None
    assert _count(session, Donation) == 0
    assert not uow.in_transaction


def test_failed_handle_commit_becomes_storage_failure_and_releases_scope(uow, session):
    txn = uow.begin_transaction()
    session.add(User(username="a", email="dup@example.com"))
    session.add(User(username="b", email="dup@example.com"))

    with pytest.raises(StorageFailure) as exc_info:
        txn.commit()

    assert exc_info.value.__cause__ is not None
    assert txn.completed
    assert not uow.in_transaction
    assert _count(session, User) == 0

    # The unit of work is usable again.
    with uow.begin_transaction() as txn:
        uow.repository(User).insert(User(username="c", email="c@example.com"))
        txn.commit()
    assert _count(session, User) == 1


def test_only_one_transaction_at_a_time(uow):
    with uow.begin_transaction() as txn:
        with pytest.raises(StorageFailure):
            uow.begin_transaction()
        txn.commit()

    # Released after commit; a new scope can open.
    with uow.begin_transaction() as txn:
        txn.commit()


def test_committed_handle_cannot_commit_again(uow):
    txn = uow.begin_transaction()
    txn.commit()

    with pytest.raises(StorageFailure):
        txn.commit()


def test_commit_outside_transaction_persists(uow, session_factory):
    uow.repository(Shelter).insert(Shelter(name="Happy Paws"))
    uow.commit()

    fresh = session_factory()
    try:
        assert _count(fresh, Shelter) == 1
    finally:
        fresh.close()


def test_commit_outside_transaction_maps_integrity_error(uow, session):
    session.add(User(username="a", email="dup@example.com"))
    session.add(User(username="b", email="dup@example.com"))

    with pytest.raises(StorageFailure):
        uow.commit()

    assert _count(session, User) == 0


def test_update_rejects_mismatched_id(uow, parties):
    users = uow.repository(User)

    with pytest.raises(InvalidArgument):
        users.update(parties["d1"], 2)


def test_update_merges_detached_entity(uow, session, parties):
    session.expunge(parties["s1"])
    detached = parties["s1"]
    detached.name = "Renamed"

    merged = uow.repository(Shelter).update(detached, 1)
    uow.commit()

    assert merged is not detached
    assert session.get(Shelter, 1).name == "Renamed"


def test_delete_removes_row(uow, session, parties):
    shelters = uow.repository(Shelter)

    shelters.delete(shelters.get_by_id(2))
    uow.commit()

    assert shelters.get_by_id(2) is None
    assert _count(session, Shelter) == 1


def test_get_all_and_queryable(uow, parties):
    users = uow.repository(User)

    assert {u.id for u in users.get_all()} == {1, 2}

    stmt = users.as_queryable().where(User.username == "d2")
    assert [u.id for u in users.query(stmt)] == [2]


def test_get_by_id_for_update_returns_row(uow, parties):
    assert uow.repository(User).get_by_id(1, for_update=True).username == "d1"
    assert uow.repository(User).get_by_id(42, for_update=True) is None


def test_increment_updates_in_database_and_refreshes_cached_instance(uow, parties):
    users = uow.repository(User)
    donor = users.get_by_id(1)

    with uow.begin_transaction() as txn:
        users.increment(1, "total_donation", Decimal("12.50"))
        users.increment(1, "total_donation", Decimal("7.50"))
        txn.commit()

    assert donor.total_donation == Decimal("20.00")


def test_increment_treats_null_as_zero(uow, session):
    session.add(User(id=5, username="nil", email="nil@example.com", total_donation=None))
    session.commit()

    users = uow.repository(User)
    with uow.begin_transaction() as txn:
        users.increment(5, "total_donation", Decimal("3"))
        txn.commit()

    assert users.get_by_id(5).total_donation == Decimal("3.00")


def test_increment_missing_row_raises_not_found(uow, parties):
    with pytest.raises(NotFound) as exc_info:
        with uow.begin_transaction():
            uow.repository(Shelter).increment(404, "donation_amount", Decimal("1"))

    assert exc_info.value.entity == "shelter"
