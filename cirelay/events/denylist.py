"""Repository denylist applied before pipeline run events are sent.

Operators configure the denylist as a single string of repository short
names separated by commas or newlines. Matching ignores case and
surrounding whitespace.
"""

from __future__ import annotations

import dataclasses
import re

_ENTRY_SEPARATORS = re.compile(r"[\n,]")


def _normalise(value: str) -> str:
    return value.strip().lower()


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryDenylist:
    """Compiled set of repository names whose events are never sent."""

    names: frozenset[str] = frozenset()

    @classmethod
    def parse(cls, raw: str | None) -> RepositoryDenylist:
        """Compile a comma or newline separated denylist string.

        Examples
        --------
        >>> RepositoryDenylist.parse("Example-Repo, other").names == {
        ...     "example-repo",
        ...     "other",
        ... }
        True

        """
        if not raw or not raw.strip():
            return cls()
        entries = (_normalise(entry) for entry in _ENTRY_SEPARATORS.split(raw))
        return cls(names=frozenset(entry for entry in entries if entry))

    def denies(self, repository: str) -> bool:
        """Return True when ``repository`` is denylisted."""
        if not self.names:
            return False
        normalised = _normalise(repository)
        if not normalised:
            return False
        return normalised in self.names


def is_repository_denied(repository: str, denylist: str | None) -> bool:
    """Return True when ``repository`` appears in the raw ``denylist`` string."""
    return RepositoryDenylist.parse(denylist).denies(repository)
