"""
Persistence-level tests: schema constraints and cascade rules.
"""

import pytest
from sqlalchemy import Text
from sqlalchemy.exc import IntegrityError, StatementError

from bustrips.models import BusType, Passenger, Trip
from bustrips.repository import PassengerRepository, TripRepository


@pytest.fixture
def session(database):
    db = database.session()
    try:
        yield db
    finally:
        db.close()


def _trip(session, **overrides):
    values = dict(
        destination="Curitiba",
        departure_date="2025-06-01",
        departure_time="07:00",
        price=99.9,
        bus_type=BusType.LARGE,
    )
    values.update(overrides)
    return TripRepository.create(session, **values)


def test_trip_is_created_with_generated_id(session):
    trip = _trip(session)
    assert trip.id
    assert trip.bus_type is BusType.LARGE


def test_unknown_bus_type_is_rejected(session):
    with pytest.raises((StatementError, LookupError)):
        _trip(session, bus_type="huge")


def test_get_loads_passengers(session):
    trip = _trip(session)
    PassengerRepository.create(session, trip.id, "Ana", "1", "1", False)
    session.expire_all()

    loaded = TripRepository.get(session, trip.id)

    assert [p.name for p in loaded.passengers] == ["Ana"]


def test_cpf_is_unique_across_trips(session):
    first = _trip(session)
    second = _trip(session)
    PassengerRepository.create(session, first.id, "Ana", "123", "1", False)

    with pytest.raises(IntegrityError):
        PassengerRepository.create(session, second.id, "Bia", "123", "2", False)


def test_passenger_needs_existing_trip(session):
    with pytest.raises(IntegrityError):
        PassengerRepository.create(session, "missing-trip", "Ana", "123", "1", False)


def test_deleting_trip_removes_its_passengers(session):
    trip = _trip(session)
    other = _trip(session)
    for i in range(3):
        PassengerRepository.create(session, trip.id, f"P{i}", f"cpf-{i}", str(i), False)
    PassengerRepository.create(session, other.id, "Stays", "cpf-other", "1", False)

    TripRepository.delete(session, trip)
    session.expire_all()

    assert session.query(Trip).filter(Trip.id == trip.id).first() is None
    assert session.query(Passenger).filter(Passenger.trip_id == trip.id).count() == 0
    assert [p.name for p in session.query(Passenger).all()] == ["Stays"]


def test_counts_follow_departure_order(session):
    early = _trip(session, departure_date="2025-01-01")
    late = _trip(session, departure_date="2025-12-01")
    PassengerRepository.create(session, early.id, "Ana", "1", "1", False)

    rows = TripRepository.list_with_passenger_counts(session)

    assert [(trip.id, count) for trip, count in rows] == [(late.id, 0), (early.id, 1)]


@pytest.mark.parametrize("column", [
    Trip.__table__.c.destination,
    Trip.__table__.c.departure_date,
    Trip.__table__.c.departure_time,
    Passenger.__table__.c.name,
    Passenger.__table__.c.cpf,
    Passenger.__table__.c.seat_number,
])
def test_free_text_columns_are_unbounded(column):
    assert isinstance(column.type, Text)
    assert column.type.length is None


def test_long_free_text_dates_are_stored(session):
    trip = _trip(session, departure_date="Wednesday, 10 April 2025", departure_time="early morning, around 07:00")
    session.expire_all()

    assert TripRepository.get(session, trip.id).departure_date == "Wednesday, 10 April 2025"


def test_failed_payment_update_is_rolled_back(session, monkeypatch):
    trip = _trip(session)
    passenger = PassengerRepository.create(session, trip.id, "Ana", "1", "1", False)

    def refuse():
        raise RuntimeError("connection lost")

    monkeypatch.setattr(session, "commit", refuse)

    with pytest.raises(RuntimeError):
        PassengerRepository.set_paid(session, passenger, True)

    monkeypatch.undo()
    assert passenger.has_paid is False


def test_failed_delete_is_rolled_back(session, monkeypatch):
    trip = _trip(session)
    passenger = PassengerRepository.create(session, trip.id, "Ana", "1", "1", False)

    def refuse():
        raise RuntimeError("connection lost")

    monkeypatch.setattr(session, "commit", refuse)

    with pytest.raises(RuntimeError):
        PassengerRepository.delete(session, passenger)

    monkeypatch.undo()
    assert PassengerRepository.get(session, passenger.id) is not None
