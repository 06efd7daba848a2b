from app.core.events import AuthEvent, AuthStateNotifier


def test_subscribe_and_unsubscribe() -> None:
    notifier = AuthStateNotifier()
    seen = []

    subscription = notifier.subscribe(lambda event, user, email: seen.append((event, email)))
    notifier.emit(AuthEvent.SIGNED_IN, None, "a@example.com")

    assert subscription.active
    subscription.unsubscribe()
    assert not subscription.active
    assert len(notifier) == 0

    notifier.emit(AuthEvent.SIGNED_IN, None, "b@example.com")
    assert seen == [(AuthEvent.SIGNED_IN, "a@example.com")]


def test_unsubscribe_twice_is_harmless() -> None:
    notifier = AuthStateNotifier()
    subscription = notifier.subscribe(lambda *args: None)
    subscription.unsubscribe()
    subscription.unsubscribe()
    assert len(notifier) == 0


def test_failing_listener_does_not_block_others(caplog) -> None:
    notifier = AuthStateNotifier()
    seen = []

    def broken(event, user, email):
        raise RuntimeError("boom")

    notifier.subscribe(broken)
    notifier.subscribe(lambda event, user, email: seen.append(event))

    notifier.emit(AuthEvent.USER_UPDATED, None, "a@example.com")

    assert seen == [AuthEvent.USER_UPDATED]
    assert "Auth listener failed for USER_UPDATED" in caplog.text
