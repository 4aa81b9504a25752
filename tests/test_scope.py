import pytest

from memekit.scope import ScopeGuard


def test_action_runs_on_exit():
    calls = []
    with ScopeGuard(calls.append, "done"):
        assert calls == []
    assert calls == ["done"]


def test_dismissed_action_does_not_run():
    calls = []
    with ScopeGuard(calls.append, "done") as guard:
        guard.dismiss()
        assert guard.active is False
    assert calls == []


def test_action_runs_on_exception_and_exception_propagates():
    calls = []
    with pytest.raises(KeyError):
        with ScopeGuard(calls.append, "cleanup"):
            raise KeyError("boom")
    assert calls == ["cleanup"]


def test_keyword_arguments_are_passed():
    seen = {}

    def record(**kwargs):
        seen.update(kwargs)

    with ScopeGuard(record, name="value") as guard:
        assert guard.active is True
        assert seen == {}
    assert guard.active is False
    assert seen == {"name": "value"}


def test_action_runs_only_once():
    calls = []
    guard = ScopeGuard(calls.append, 1)
    with guard:
        pass
    with guard:
        pass
    assert calls == [1]
    assert guard.active is False


def test_enter_returns_guard():
    guard = ScopeGuard(lambda: None)
    with guard as entered:
        assert entered is guard
        assert entered.active is True


def test_non_callable_rejected():
    with pytest.raises(TypeError):
        ScopeGuard(42)