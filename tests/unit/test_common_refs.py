"""Unit tests for branch ref and repository URL helpers."""

from __future__ import annotations

import pytest

from cirelay.common.refs import repository_name, strip_branch_ref


@pytest.mark.parametrize(
    ("branch", "expected"),
    [
        pytest.param("refs/heads/main", "main", id="refs_heads"),
        pytest.param("refs/remotes/origin/main", "main", id="refs_remotes_origin"),
        pytest.param("origin/main", "main", id="origin"),
        pytest.param("main", "main", id="unprefixed"),
        pytest.param("", "", id="empty"),
        pytest.param("feature/refs/heads/x", "feature/refs/heads/x", id="infix_kept"),
        pytest.param("upstream/main", "upstream/main", id="other_remote_kept"),
    ],
)
def test_strip_branch_ref(branch: str, expected: str) -> None:
    """strip_branch_ref removes one recognised prefix."""
    assert strip_branch_ref(branch) == expected


def test_strip_branch_ref_removes_at_most_one_prefix() -> None:
    """Only the first matching prefix is removed."""
    assert strip_branch_ref("refs/heads/origin/main") == "origin/main"


@pytest.mark.parametrize(
    "branch",
    ["refs/heads/main", "refs/remotes/origin/release/1.x", "origin/dev", "main", ""],
)
def test_strip_branch_ref_is_idempotent(branch: str) -> None:
    """Stripping an already stripped branch changes nothing."""
    once = strip_branch_ref(branch)
    assert strip_branch_ref(once) == once


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        pytest.param("https://example.com/org/repo.git", "repo", id="https"),
        pytest.param("git@host:org/repo.git", "repo", id="scp_style"),
        pytest.param("https://example.com/org/repo", "repo", id="no_suffix"),
        pytest.param("https://example.com/org/repo/", "repo", id="trailing_slash"),
        pytest.param("repo.git", "repo", id="bare_name"),
        pytest.param("", "", id="empty"),
    ],
)
def test_repository_name(url: str, expected: str) -> None:
    """repository_name returns the final non-empty URL segment."""
    assert repository_name(url) == expected
