"""Branch ref and repository URL helpers.

Branch names arrive from the CI platform in several shapes depending on how
the checkout was configured (``refs/heads/main``, ``origin/main`` or plain
``main``). Repository URLs arrive as either HTTPS or SCP-style remotes. Both
are reduced to the short forms reported on pipeline run events.
"""

from __future__ import annotations

import re

_BRANCH_REF_PREFIXES = ("refs/heads/", "refs/remotes/origin/", "origin/")
_URL_SEPARATORS = re.compile(r"[/:]")


def strip_branch_ref(branch: str) -> str:
    """Remove a leading git ref prefix from a branch name.

    At most one prefix is removed; the first of ``refs/heads/``,
    ``refs/remotes/origin/`` and ``origin/`` that matches wins.

    Examples
    --------
    >>> strip_branch_ref("refs/heads/main")
    'main'
    >>> strip_branch_ref("refs/remotes/origin/main")
    'main'
    >>> strip_branch_ref("feature/login")
    'feature/login'

    """
    if not branch:
        return ""
    for prefix in _BRANCH_REF_PREFIXES:
        if branch.startswith(prefix):
            return branch.removeprefix(prefix)
    return branch


def repository_name(url: str) -> str:
    """Derive the repository short name from a remote URL.

    Examples
    --------
    >>> repository_name("https://example.com/org/repo.git")
    'repo'
    >>> repository_name("git@host:org/repo.git")
    'repo'
    >>> repository_name("")
    ''

    """
    if not url:
        return ""
    cleaned = url.removesuffix(".git")
    segments = [segment for segment in _URL_SEPARATORS.split(cleaned) if segment]
    return segments[-1] if segments else ""
