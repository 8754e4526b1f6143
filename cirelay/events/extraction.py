"""Extract raw event fields from a completed CI run.

Every field has its own ordered list of sources. Sources are optional and
may fail; a failing or empty source hands over to the next one, and a field
with no usable source is reported as an empty string. Extraction never
raises for missing data.

Values returned here are raw: branch names still carry their ref prefixes
and the repository URL has not been reduced to a short name.
"""

from __future__ import annotations

import dataclasses
import typing as typ

from cirelay.common.fallback import NamedStep, first_non_empty, first_present
from cirelay.logging import format_log_message, get_logger, log_warning
from cirelay.runs.models import BranchHead, ChangeRequestHead

from .observability import RUN_LOG_PREFIX

if typ.TYPE_CHECKING:
    from cirelay.runs.protocol import RunContext, RunLogSink, UserDirectory

logger = get_logger(__name__)

REPOSITORY_URL_ENV_VARS = ("GIT_URL", "GIT_URL_1", "GIT_URL_2")


@dataclasses.dataclass(frozen=True, slots=True)
class RawRunFields:
    """Candidate event fields before normalization."""

    repository_url: str = ""
    branch: str = ""
    target_branch: str = ""
    pr_number: str = ""
    commit_sha: str = ""
    email: str = ""


@dataclasses.dataclass(frozen=True, slots=True)
class _ScmFields:
    branch: str = ""
    target_branch: str = ""
    pr_number: str = ""
    commit_sha: str = ""


class RunFieldExtractor:
    """Read raw event fields from a ``RunContext``.

    Parameters
    ----------
    user_directory
        Resolves change-log authors and the triggering user to emails.
    log_sink
        Optional run console that receives diagnostic lines.

    """

    def __init__(
        self,
        user_directory: UserDirectory,
        *,
        log_sink: RunLogSink | None = None,
    ) -> None:
        """Initialise the extractor."""
        self._users = user_directory
        self._log_sink = log_sink

    def extract(self, run: RunContext) -> RawRunFields:
        """Return every raw field for ``run``."""
        scm = self._scm_fields(run)
        return RawRunFields(
            repository_url=self.repository_url(run),
            branch=scm.branch,
            target_branch=scm.target_branch,
            pr_number=scm.pr_number,
            commit_sha=scm.commit_sha,
            email=self.author_email(run),
        )

    def repository_url(self, run: RunContext) -> str:
        """Return the first configured remote URL from the run environment."""
        try:
            env = run.environment()
        except Exception as exc:  # noqa: BLE001 - environment is optional
            self._note("Unable to determine repository URL: %s", exc)
            return ""
        return first_non_empty(*(env.get(name) for name in REPOSITORY_URL_ENV_VARS))

    def author_email(self, run: RunContext) -> str:
        """Return the best-effort author email for ``run``."""
        email = first_present(
            (
                NamedStep("contributor metadata", run.contributor_email),
                NamedStep("change log", lambda: self._change_log_email(run)),
                NamedStep("build user", lambda: self._build_user_email(run)),
            ),
            on_error=self._step_failed,
        )
        return email or ""

    def _scm_fields(self, run: RunContext) -> _ScmFields:
        try:
            revision = run.scm_revision()
        except Exception as exc:  # noqa: BLE001 - SCM data is optional
            self._note("Unable to read SCM revision: %s", exc)
            return _ScmFields()
        if revision is None:
            return _ScmFields()

        commit_sha = str(revision)
        match revision.head:
            case ChangeRequestHead(name=name, target=target, id=pr_id):
                return _ScmFields(
                    branch=name,
                    target_branch=target,
                    pr_number=pr_id,
                    commit_sha=commit_sha,
                )
            case BranchHead(name=name):
                return _ScmFields(branch=name, commit_sha=commit_sha)
            case _:
                return _ScmFields(commit_sha=commit_sha)

    def _change_log_email(self, run: RunContext) -> str | None:
        for entry in run.change_log():
            if entry.author_id is None:
                continue
            try:
                email = self._users.resolve_email(entry.author_id)
            except Exception as exc:  # noqa: BLE001 - later authors may resolve
                self._note(
                    "Unable to resolve email for change log author %s: %s",
                    entry.author_id,
                    exc,
                )
                continue
            if email:
                return email
        return None

    def _build_user_email(self, run: RunContext) -> str | None:
        user_id = run.started_by_user_id()
        if user_id is None:
            return None
        email = self._users.resolve_email(user_id)
        if email:
            self._write("fallback email found from build user.")
        return email

    def _step_failed(self, step: str, exc: Exception) -> None:
        self._note("Unable to read author email from %s: %s", step, exc)

    def _note(self, template: str, *args: object) -> None:
        log_warning(logger, template, *args)
        self._write(format_log_message(template, *args))

    def _write(self, message: str) -> None:
        if self._log_sink is not None:
            self._log_sink.write_line(f"{RUN_LOG_PREFIX}{message}")
