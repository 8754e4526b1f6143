"""Unit tests for ordered fallback chains."""

from __future__ import annotations

from cirelay.common.fallback import NamedStep, first_non_empty, first_present


def _fail() -> str:
    msg = "source offline"
    raise RuntimeError(msg)


def test_first_present_returns_first_non_blank_value() -> None:
    """Blank and missing values fall through to later steps."""
    steps = [
        NamedStep("missing", lambda: None),
        NamedStep("blank", lambda: "  "),
        NamedStep("hit", lambda: "value"),
        NamedStep("later", lambda: "ignored"),
    ]
    assert first_present(steps) == "value"


def test_first_present_stops_at_first_hit() -> None:
    """Steps after the first hit are never evaluated."""
    calls: list[str] = []

    def _step(name: str, value: str | None) -> NamedStep:
        def _produce() -> str | None:
            calls.append(name)
            return value

        return NamedStep(name, _produce)

    first_present([_step("a", None), _step("b", "x"), _step("c", "y")])
    assert calls == ["a", "b"]


def test_first_present_reports_and_skips_failing_steps() -> None:
    """A raising step is reported and treated as empty."""
    failures: list[tuple[str, str]] = []

    result = first_present(
        [NamedStep("broken", _fail), NamedStep("backup", lambda: "ok")],
        on_error=lambda name, exc: failures.append((name, str(exc))),
    )

    assert result == "ok"
    assert failures == [("broken", "source offline")]


def test_first_present_returns_none_when_exhausted() -> None:
    """No usable step yields None."""
    assert first_present([NamedStep("broken", _fail)]) is None
    assert first_present([]) is None


def test_first_non_empty() -> None:
    """first_non_empty skips None and blank strings."""
    assert first_non_empty(None, "", " ", "git@host:a/b.git", "x") == "git@host:a/b.git"
    assert first_non_empty(None, "") == ""
