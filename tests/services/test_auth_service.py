import pytest

from app.core.events import AuthEvent, AuthStateNotifier
from app.schemas.auth import UserLogin, UserRegister
from app.services.auth_service import AuthService


def _registration(**overrides) -> UserRegister:
    data = {"email": "Owner@Example.com", "password": "secret1", "full_name": "Gym Owner", "user_type": "gym_owner"}
    data.update(overrides)
    return UserRegister(**data)


@pytest.mark.asyncio
async def test_register_stores_hashed_password_and_metadata(db_session, events) -> None:
    service = AuthService(db_session, events=events)

    response = await service.register(_registration())

    user = await service.user_repo.get_by_email("owner@example.com")
    assert user.password_hash != "secret1"
    assert user.user_type == "gym_owner"
    assert response.user.email == "owner@example.com"
    assert response.user.metadata["user_type"] == "gym_owner"


@pytest.mark.asyncio
async def test_register_duplicate_raises(db_session, events) -> None:
    service = AuthService(db_session, events=events)
    await service.register(_registration())

    with pytest.raises(ValueError, match="already exists"):
        await service.register(_registration(password="another1"))


@pytest.mark.asyncio
async def test_login_updates_last_sign_in(db_session, events) -> None:
    service = AuthService(db_session, events=events)
    await service.register(_registration())

    response = await service.login(UserLogin(email="owner@example.com", password="secret1"))

    assert response.user.last_sign_in_at is not None


@pytest.mark.asyncio
async def test_login_rejects_deactivated_account(db_session, events) -> None:
    service = AuthService(db_session, events=events)
    await service.register(_registration())
    user = await service.user_repo.get_by_email("owner@example.com")
    await service.user_repo.update(user.id, is_active=False)

    with pytest.raises(ValueError, match="deactivated"):
        await service.login(UserLogin(email="owner@example.com", password="secret1"))


@pytest.mark.asyncio
async def test_get_current_user_from_access_token(db_session, events) -> None:
    service = AuthService(db_session, events=events)
    response = await service.register(_registration())

    user = await service.get_current_user(response.access_token)
    assert str(user.id) == response.user.id

    with pytest.raises(ValueError):
        await service.get_current_user("not-a-token")


@pytest.mark.asyncio
async def test_sign_up_and_sign_in_events(db_session, events) -> None:
    service = AuthService(db_session, events=events)
    seen = []
    subscription = events.subscribe(lambda event, user, email: seen.append((event, email)))

    await service.register(_registration())
    await service.login(UserLogin(email="owner@example.com", password="secret1"))
    subscription.unsubscribe()
    await service.login(UserLogin(email="owner@example.com", password="secret1"))

    assert seen == [
        (AuthEvent.SIGNED_UP, "owner@example.com"),
        (AuthEvent.SIGNED_IN, "owner@example.com"),
    ]


@pytest.mark.asyncio
async def test_register_race_on_unique_email_raises_value_error(db_session, events, monkeypatch) -> None:
    service = AuthService(db_session, events=events)
    await service.register(_registration())

    async def no_existing_user(email):
        return None

    # Second sign-up passed the existence check before the first one committed
    monkeypatch.setattr(service.user_repo, "get_by_email", no_existing_user)

    with pytest.raises(ValueError, match="already exists"):
        await service.register(_registration(password="another1"))

    assert await service.user_repo.count() == 1


def test_empty_notifier_is_kept() -> None:
    notifier = AuthStateNotifier()

    assert len(notifier) == 0
    assert AuthService(None, events=notifier).events is notifier
