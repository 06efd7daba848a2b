from datetime import timedelta

import pytest

from app.repositories.password_reset_otp_repo import PasswordResetOTPRepository

from tests.conftest import naive


def test_generated_codes_are_six_digits() -> None:
    for _ in range(500):
        code = PasswordResetOTPRepository.generate_code()
        assert len(code) == 6
        assert code.isdigit()
        assert 100000 <= int(code) <= 999999


@pytest.mark.asyncio
async def test_create_code_persists_unused_row(db_session, clock) -> None:
    repo = PasswordResetOTPRepository(db_session)
    otp = await repo.create_code("user@example.com", now=clock(), expires_in_minutes=10)

    assert otp.email == "user@example.com"
    assert otp.used is False
    assert naive(otp.expires_at) == naive(clock() + timedelta(minutes=10))


@pytest.mark.asyncio
async def test_find_valid_code_matches_exactly(db_session, clock) -> None:
    repo = PasswordResetOTPRepository(db_session)
    otp = await repo.create_code("user@example.com", now=clock(), expires_in_minutes=10)

    assert (await repo.find_valid_code("user@example.com", otp.otp, clock())).id == otp.id
    assert await repo.find_valid_code("other@example.com", otp.otp, clock()) is None

    wrong = "100000" if otp.otp != "100000" else "100001"
    assert await repo.find_valid_code("user@example.com", wrong, clock()) is None


@pytest.mark.asyncio
async def test_find_valid_code_respects_expiry_boundary(db_session, clock) -> None:
    repo = PasswordResetOTPRepository(db_session)
    otp = await repo.create_code("user@example.com", now=clock(), expires_in_minutes=10)

    at_expiry = clock() + timedelta(minutes=10)
    assert await repo.find_valid_code("user@example.com", otp.otp, at_expiry) is not None

    after_expiry = at_expiry + timedelta(seconds=1)
    assert await repo.find_valid_code("user@example.com", otp.otp, after_expiry) is None


@pytest.mark.asyncio
async def test_find_valid_code_prefers_newest_row(db_session, clock, monkeypatch) -> None:
    repo = PasswordResetOTPRepository(db_session)
    monkeypatch.setattr(PasswordResetOTPRepository, "generate_code", staticmethod(lambda: "424242"))

    older = await repo.create_code("user@example.com", now=clock(), expires_in_minutes=10)
    clock.advance(minutes=1)
    newer = await repo.create_code("user@example.com", now=clock(), expires_in_minutes=10)

    found = await repo.find_valid_code("user@example.com", "424242", clock())
    assert found.id == newer.id
    assert found.id != older.id


@pytest.mark.asyncio
async def test_mark_used_is_one_way(db_session, clock) -> None:
    repo = PasswordResetOTPRepository(db_session)
    otp = await repo.create_code("user@example.com", now=clock(), expires_in_minutes=10)

    assert await repo.mark_used(otp.id, clock()) is True
    assert await repo.mark_used(otp.id, clock()) is False

    await db_session.refresh(otp)
    assert otp.used is True
    assert await repo.find_valid_code("user@example.com", otp.otp, clock()) is None


@pytest.mark.asyncio
async def test_earlier_codes_stay_valid(db_session, clock) -> None:
    repo = PasswordResetOTPRepository(db_session)
    first = await repo.create_code("user@example.com", now=clock(), expires_in_minutes=10)
    second = await repo.create_code("user@example.com", now=clock(), expires_in_minutes=10)

    assert (await repo.find_valid_code("user@example.com", first.otp, clock())) is not None
    assert (await repo.find_valid_code("user@example.com", second.otp, clock())) is not None
    assert await repo.count() == 2
