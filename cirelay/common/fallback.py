"""Ordered fallback chains over optional value producers.

Several run fields (author email, host name, repository URL) are read from a
list of sources where any source may be missing or fail. Each source is a
zero-argument callable; the chain evaluates them left to right and stops at
the first one that yields a non-blank string.
"""

from __future__ import annotations

import dataclasses
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

type FallbackStep = cabc.Callable[[], str | None]
type StepErrorHandler = cabc.Callable[[str, Exception], None]


def _is_present(value: str | None) -> typ.TypeGuard[str]:
    return value is not None and bool(value.strip())


@dataclasses.dataclass(frozen=True, slots=True)
class NamedStep:
    """A fallback step with a label used in diagnostics."""

    name: str
    produce: FallbackStep

    def __call__(self) -> str | None:
        """Run the wrapped producer."""
        return self.produce()


def first_present(
    steps: cabc.Iterable[NamedStep],
    *,
    on_error: StepErrorHandler | None = None,
) -> str | None:
    """Return the first non-blank value produced by ``steps``.

    Steps run lazily in order. A step that raises is reported to ``on_error``
    (when given) and treated as having produced nothing.

    Examples
    --------
    >>> first_present([NamedStep("a", lambda: ""), NamedStep("b", lambda: "x")])
    'x'

    """
    for step in steps:
        try:
            value = step()
        except Exception as exc:  # noqa: BLE001 - every source is optional
            if on_error is not None:
                on_error(step.name, exc)
            continue
        if _is_present(value):
            return value
    return None


def first_non_empty(*values: str | None) -> str:
    """Return the first non-blank value, or ``""`` when there is none."""
    for value in values:
        if _is_present(value):
            return value
    return ""
