"""Unit tests for the repository denylist."""

from __future__ import annotations

import pytest

from cirelay.events import RepositoryDenylist, is_repository_denied


@pytest.mark.parametrize(
    ("repository", "expected"),
    [
        pytest.param("example-repo", True, id="lowercase"),
        pytest.param("EXAMPLE-REPO", True, id="uppercase"),
        pytest.param("  Example-Repo  ", True, id="padded"),
        pytest.param("other", True, id="second_entry"),
        pytest.param("other-repo", False, id="prefix_only"),
        pytest.param("", False, id="empty_repository"),
    ],
)
def test_denylist_matching(repository: str, *, expected: bool) -> None:
    """Matching ignores case and surrounding whitespace."""
    assert is_repository_denied(repository, "Example-Repo, other") is expected


@pytest.mark.parametrize("raw", [None, "", "   ", ",\n,"])
def test_empty_denylist_never_denies(raw: str | None) -> None:
    """A blank denylist denies nothing."""
    assert is_repository_denied("example-repo", raw) is False
    assert RepositoryDenylist.parse(raw).names == frozenset()


def test_newline_separated_entries() -> None:
    """Entries may be separated by newlines as well as commas."""
    denylist = RepositoryDenylist.parse("alpha\n Beta ,gamma\n")
    assert denylist.names == {"alpha", "beta", "gamma"}
    assert denylist.denies("BETA")
    assert not denylist.denies("delta")
