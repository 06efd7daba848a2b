import uuid
from datetime import time, timedelta

import pytest

from app.core.exceptions import NotFoundError, PermissionDeniedError
from app.repositories.booking_repo import BookingRepository
from app.repositories.favorite_repo import FavoriteRepository
from app.schemas.gym import GymCreate, GymUpdate, TimeSlotCreate, TrainerCreate
from app.services.gym_service import GymService

from tests.conftest import make_user


def _gym(**overrides) -> GymCreate:
    data = {
        "name": "Iron  Temple",
        "location": "Indore",
        "price_per_session": 250,
        "amenities": "Showers, , Lockers",
    }
    data.update(overrides)
    return GymCreate(**data)


@pytest.fixture
def gym_service(db_session, clock) -> GymService:
    return GymService(db_session, clock=clock)


# ============================================================
# Listing
# ============================================================

@pytest.mark.asyncio
async def test_create_gym_sets_owner_and_defaults(gym_service, db_session) -> None:
    owner = await make_user(db_session, "owner@example.com", user_type="gym_owner")

    gym = await gym_service.create_gym(_gym(), owner)

    assert gym.owner_id == owner.id
    assert gym.name == "Iron Temple"
    assert gym.amenities == ["Showers", "Lockers"]
    assert gym.rating == 4.0
    assert gym.is_active is True


@pytest.mark.asyncio
async def test_only_gym_owners_can_list(gym_service, db_session) -> None:
    member = await make_user(db_session, "member@example.com")

    with pytest.raises(PermissionDeniedError, match="gym owner"):
        await gym_service.create_gym(_gym(), member)


@pytest.mark.asyncio
async def test_search_filters_and_orders_by_rating(gym_service, db_session) -> None:
    owner = await make_user(db_session, "owner@example.com", user_type="gym_owner")
    budget = await gym_service.create_gym(_gym(name="Budget Barbell", price_per_session=100), owner)
    premium = await gym_service.create_gym(_gym(name="Premium Power", price_per_session=900), owner)
    await gym_service.create_gym(_gym(name="Bhopal Box", location="Bhopal"), owner)
    closed = await gym_service.create_gym(_gym(name="Closed Barbell"), owner)
    await gym_service.gym_repo.update(closed.id, is_active=False)
    await gym_service.gym_repo.update(budget.id, rating=4.8)

    by_location = await gym_service.search_gyms(location="indore")
    assert [g.id for g in by_location] == [budget.id, premium.id]

    assert [g.id for g in await gym_service.search_gyms(name="BARBELL")] == [budget.id]
    assert [g.id for g in await gym_service.search_gyms(max_price=500, location="Indore")] == [budget.id]
    assert await gym_service.search_gyms(name="100%") == []


@pytest.mark.asyncio
async def test_owner_checks(gym_service, db_session) -> None:
    owner = await make_user(db_session, "owner@example.com", user_type="gym_owner")
    rival = await make_user(db_session, "rival@example.com", user_type="gym_owner")
    gym = await gym_service.create_gym(_gym(), owner)

    with pytest.raises(PermissionDeniedError):
        await gym_service.update_gym(gym.id, GymUpdate(name="Mine Now"), rival.id)

    updated = await gym_service.update_gym(gym.id, GymUpdate(price_per_session=300), owner.id)
    assert updated.price_per_session == 300
    assert updated.name == "Iron Temple"

    with pytest.raises(NotFoundError):
        await gym_service.get_owned_gym(uuid.uuid4(), owner.id)


@pytest.mark.asyncio
async def test_owned_gyms_carry_booking_counts(gym_service, db_session, clock) -> None:
    owner = await make_user(db_session, "owner@example.com", user_type="gym_owner")
    member = await make_user(db_session, "member@example.com")
    busy = await gym_service.create_gym(_gym(name="Busy"), owner)
    await gym_service.create_gym(_gym(name="Quiet"), owner)

    bookings = BookingRepository(db_session)
    for _ in range(2):
        await bookings.create(user_id=member.id, gym_id=busy.id, booking_date=clock().date(), amount=250)

    counts = {row.name: row.bookings_count for row in await gym_service.list_owned_gyms(owner.id)}
    assert counts == {"Busy": 2, "Quiet": 0}


@pytest.mark.asyncio
async def test_delete_gym_removes_dependent_rows(gym_service, db_session, clock) -> None:
    owner = await make_user(db_session, "owner@example.com", user_type="gym_owner")
    member = await make_user(db_session, "member@example.com")
    gym = await gym_service.create_gym(_gym(), owner)
    await gym_service.add_trainer(gym.id, TrainerCreate(name="Asha", speciality="Yoga"), owner.id)
    await BookingRepository(db_session).create(
        user_id=member.id, gym_id=gym.id, booking_date=clock().date(), amount=250
    )
    await FavoriteRepository(db_session).create(user_id=member.id, gym_id=gym.id)

    with pytest.raises(PermissionDeniedError):
        await gym_service.delete_gym(gym.id, member.id)

    await gym_service.delete_gym(gym.id, owner.id)

    with pytest.raises(NotFoundError):
        await gym_service.get_gym(gym.id)
    assert await gym_service.trainer_repo.count() == 0
    assert await BookingRepository(db_session).count() == 0
    assert await FavoriteRepository(db_session).count() == 0


# ============================================================
# Trainers and time slots
# ============================================================

@pytest.mark.asyncio
async def test_trainers_are_managed_per_gym(gym_service, db_session) -> None:
    owner = await make_user(db_session, "owner@example.com", user_type="gym_owner")
    gym = await gym_service.create_gym(_gym(), owner)
    other = await gym_service.create_gym(_gym(name="Other"), owner)

    first = await gym_service.add_trainer(gym.id, TrainerCreate(name=" Asha ", speciality="Yoga"), owner.id)
    await gym_service.add_trainer(gym.id, TrainerCreate(name="Ravi", speciality="Strength"), owner.id)

    assert [t.name for t in await gym_service.list_trainers(gym.id)] == ["Asha", "Ravi"]

    with pytest.raises(NotFoundError, match="Trainer not found"):
        await gym_service.remove_trainer(other.id, first.id, owner.id)

    await gym_service.remove_trainer(gym.id, first.id, owner.id)
    assert [t.name for t in await gym_service.list_trainers(gym.id)] == ["Ravi"]


def test_trainer_requires_name_and_speciality() -> None:
    with pytest.raises(ValueError):
        TrainerCreate(name="  ", speciality="Yoga")


@pytest.mark.asyncio
async def test_time_slots_sorted_by_start(gym_service, db_session) -> None:
    owner = await make_user(db_session, "owner@example.com", user_type="gym_owner")
    member = await make_user(db_session, "member@example.com")
    gym = await gym_service.create_gym(_gym(), owner)

    evening = TimeSlotCreate(start_time=time(18, 0), end_time=time(19, 0), max_capacity=10)
    morning = TimeSlotCreate(start_time=time(6, 0), end_time=time(7, 30), max_capacity=20)
    await gym_service.add_time_slot(gym.id, evening, owner.id)
    await gym_service.add_time_slot(gym.id, morning, owner.id)

    slots = await gym_service.list_time_slots(gym.id)
    assert [s.start_time for s in slots] == [time(6, 0), time(18, 0)]

    with pytest.raises(PermissionDeniedError):
        await gym_service.add_time_slot(gym.id, morning, member.id)


def test_time_slot_window_validation() -> None:
    with pytest.raises(ValueError, match="End time must be after start time"):
        TimeSlotCreate(start_time=time(9, 0), end_time=time(8, 0), max_capacity=5)
    with pytest.raises(ValueError):
        TimeSlotCreate(start_time=time(8, 0), end_time=time(9, 0), max_capacity=0)


# ============================================================
# Analytics
# ============================================================

@pytest.mark.asyncio
async def test_stats_counts_windows_revenue_and_statuses(gym_service, db_session, clock) -> None:
    owner = await make_user(db_session, "owner@example.com", user_type="gym_owner")
    member = await make_user(db_session, "member@example.com")
    gym = await gym_service.create_gym(_gym(), owner)
    today = clock().date()

    bookings = BookingRepository(db_session)
    for offset, status in [(0, "confirmed"), (0, "cancelled"), (-3, "confirmed"), (-30, "confirmed")]:
        await bookings.create(
            user_id=member.id,
            gym_id=gym.id,
            booking_date=today + timedelta(days=offset),
            status=status,
            amount=250,
        )

    stats = await gym_service.get_stats(gym.id, owner.id)

    assert stats.total_bookings == 4
    assert stats.today_bookings == 2
    assert stats.week_bookings == 3
    assert stats.total_revenue == 750
    assert [(s.status, s.count) for s in stats.status_breakdown] == [("cancelled", 1), ("confirmed", 3)]

    with pytest.raises(PermissionDeniedError):
        await gym_service.get_stats(gym.id, member.id)
