"""Exceptions for GitHub service."""

from codesyncer.services.github.types import SyncStage


class GitHubAPIError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
        action: str | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        self.action = action  # Human-readable step, e.g. "create repository"
        super().__init__(message)


class GitHubRepoRenamed(GitHubAPIError):
    """Repository has been renamed or transferred on GitHub.

    GitHub answers 301 for the old name. new_full_name is the owner/repo the
    redirect points at; when GitHub only gives an ID-based URL it is None and
    repo_id carries the repository ID instead.
    """

    def __init__(
        self,
        old_full_name: str,
        new_full_name: str | None = None,
        repo_id: int | None = None,
        action: str | None = None,
    ):
        self.old_full_name = old_full_name
        self.new_full_name = new_full_name
        self.repo_id = repo_id

        if new_full_name:
            reason = f"Repository renamed: {old_full_name} -> {new_full_name}"
        elif repo_id:
            reason = f"Repository {old_full_name} moved (GitHub ID: {repo_id})"
        else:
            reason = f"Repository {old_full_name} was moved"
        message = f"Failed to {action}: {reason} (Status: 301)" if action else reason

        super().__init__(message, status_code=301, action=action)


class GitHubProtocolError(GitHubAPIError):
    """A successful GitHub response that lacks a field the caller depends on.

    Never retried: a 2xx without the expected SHA means the API contract
    was broken, not that the request should be repeated.
    """


class SyncError(Exception):
    """A sync run aborted at a specific pipeline stage.

    Each stage has its own subclass so callers can tell where the run
    stopped without parsing messages. The message is the cause's message,
    which already names the attempted action.
    """

    stage: SyncStage = SyncStage.FAILED

    def __init__(self, cause: Exception):
        self.cause = cause
        self.message = getattr(cause, "message", None) or str(cause)
        super().__init__(self.message)

    @property
    def status_code(self) -> int | None:
        """HTTP status of the underlying GitHub failure, if there was one."""
        return getattr(self.cause, "status_code", None)

    @property
    def rate_limit_reset(self) -> int | None:
        return getattr(self.cause, "rate_limit_reset", None)


class RepositoryResolutionError(SyncError):
    """Checking for or creating the target repository failed."""

    stage = SyncStage.RESOLVE_REPO


class ReferenceReadError(SyncError):
    """Reading the default branch, its tip commit or base tree failed."""

    stage = SyncStage.READ_REF


class BlobCreationError(SyncError):
    """At least one blob upload failed; the whole batch is discarded."""

    stage = SyncStage.CREATE_BLOBS


class TreeCreationError(SyncError):
    stage = SyncStage.CREATE_TREE


class CommitCreationError(SyncError):
    stage = SyncStage.CREATE_COMMIT


class ReferenceUpdateError(SyncError):
    """Both the ref update and the ref creation fallback failed."""

    stage = SyncStage.UPDATE_REF
