"""Data types for the GitHub sync pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from codesyncer.services.github.constants import BLOB_TYPE, REGULAR_FILE_MODE


class SyncStage(str, Enum):
    """States of one sync run, in execution order.

    FAILED is reachable from every state and is terminal.
    """

    START = "start"
    RESOLVE_REPO = "resolve_repo"
    READ_REF = "read_ref"
    CREATE_BLOBS = "create_blobs"
    CREATE_TREE = "create_tree"
    CREATE_COMMIT = "create_commit"
    UPDATE_REF = "update_ref"
    DONE = "done"
    FAILED = "failed"


class RefAction(str, Enum):
    """How the branch reference was moved to the new commit."""

    UPDATED = "updated"  # PATCH of an existing ref
    CREATED = "created"  # POST of a new ref (first commit on the branch)


def validate_file_path(path: str) -> str:
    """
    Check that a path is repo-relative and forward-slash separated.

    Rejects empty paths, absolute paths, backslashes, and empty,
    "." or ".." segments.

    Returns:
        The path unchanged

    Raises:
        ValueError: If the path is not a valid repository path
    """
    if not path:
        raise ValueError("File path must not be empty")
    if "\\" in path:
        raise ValueError(f"File path must use forward slashes: {path!r}")
    if path.startswith("/"):
        raise ValueError(f"File path must be relative to the repository root: {path!r}")
    for segment in path.split("/"):
        if segment in ("", ".", ".."):
            raise ValueError(f"File path has an invalid segment: {path!r}")
    return path


@dataclass(frozen=True)
class FileObject:
    """One file to sync: repository-relative path and raw text content."""

    path: str
    content: str

    def __post_init__(self) -> None:
        validate_file_path(self.path)


@dataclass(frozen=True)
class RepositoryCoordinate:
    """Identifies a remote repository."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def api_path(self) -> str:
        """Path of the repository resource, relative to the API root."""
        return f"/repos/{self.owner}/{self.name}"


@dataclass
class SyncContext:
    """Remote state read at the start of a sync.

    None SHAs mean the repository has no history yet, which is the
    expected state on a first sync and not an error.
    """

    default_branch: str
    latest_commit_sha: str | None = None
    base_tree_sha: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.latest_commit_sha is None


@dataclass(frozen=True)
class BlobRef:
    """Server-assigned content address for one file's bytes."""

    path: str
    sha: str


@dataclass(frozen=True)
class TreeEntry:
    """Single entry of a tree creation request."""

    path: str
    sha: str
    mode: str = REGULAR_FILE_MODE
    type: str = BLOB_TYPE

    @classmethod
    def from_blob(cls, blob: BlobRef) -> "TreeEntry":
        return cls(path=blob.path, sha=blob.sha)

    def to_payload(self) -> dict[str, Any]:
        return {"path": self.path, "mode": self.mode, "type": self.type, "sha": self.sha}


@dataclass
class GitHubUser:
    """The authenticated GitHub account."""

    login: str
    avatar_url: str | None = None
    name: str | None = None


@dataclass
class SyncResult:
    """Outcome of a successful sync run."""

    url: str  # Canonical HTTPS URL of the synced repository
    commit_sha: str
    tree_sha: str
    branch: str
    files_synced: int
    created_repository: bool
    ref_action: RefAction
    parent_sha: str | None = None
    stages: list[SyncStage] = field(default_factory=list)  # Stages visited, in order
