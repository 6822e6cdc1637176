from unittest.mock import MagicMock

from redirector.core.retry import retry_call


def test_first_success_is_single_attempt():
    fn = MagicMock(return_value="ok")

    outcome = retry_call(fn, retries=3, label="do it")

    assert outcome.succeeded is True
    assert outcome.value == "ok"
    assert outcome.attempts == 1
    fn.assert_called_once()


def test_fails_twice_then_succeeds():
    fn = MagicMock(side_effect=[OSError("down"), OSError("down"), "ok"])

    outcome = retry_call(fn, retries=3, label="do it")

    assert outcome.succeeded is True
    assert outcome.value == "ok"
    assert fn.call_count == 3


def test_exhausted_after_one_plus_retries():
    err = OSError("down")
    fn = MagicMock(side_effect=err)

    outcome = retry_call(fn, retries=3, label="do it")

    assert outcome.succeeded is False
    assert outcome.attempts == 4
    assert outcome.error is err
    assert fn.call_count == 4


def test_benign_error_is_success_without_retry():
    fn = MagicMock(side_effect=ValueError("already exists"))

    outcome = retry_call(
        fn,
        retries=3,
        label="create",
        is_benign=lambda exc: "already exists" in str(exc),
    )

    assert outcome.succeeded is True
    assert outcome.benign is True
    assert fn.call_count == 1


def test_logs_remaining_tries(caplog):
    fn = MagicMock(side_effect=OSError("down"))

    with caplog.at_level("WARNING", logger="redirector.retry"):
        retry_call(fn, retries=2, label="connect")

    messages = [r.getMessage() for r in caplog.records]
    assert any("remaining tries: 2" in m for m in messages)
    assert any("remaining tries: 1" in m for m in messages)
    assert any("no tries left" in m for m in messages)


def test_delay_backs_off_between_attempts(monkeypatch):
    sleeps = []
    monkeypatch.setattr("redirector.core.retry.time.sleep", sleeps.append)
    fn = MagicMock(side_effect=[OSError("down"), OSError("down"), "ok"])

    retry_call(fn, retries=3, label="connect", delay=0.5)

    assert sleeps == [0.5, 1.0]
