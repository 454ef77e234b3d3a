"""
GitHub service package.

Re-exports all public types and classes.
Usage: `from codesyncer.services.github import GitHubService, FileObject`

Module structure:
- service.py: Main GitHubService facade
- sync.py: The single-commit sync pipeline (state machine)
- read_operations.py: User lookup and branch/tree reads
- write_operations.py: Repository creation and Git Data API mutations
- transport.py: Authenticated request issuance and error translation
- oauth.py: OAuth authorize URL and code exchange
- helpers.py: Rate limit handling and error utilities
- types.py: Data types
- exceptions.py: Custom exceptions
- constants.py: API constants
"""

from codesyncer.services.github.exceptions import (
    BlobCreationError,
    CommitCreationError,
    GitHubAPIError,
    GitHubProtocolError,
    GitHubRepoRenamed,
    ReferenceReadError,
    ReferenceUpdateError,
    RepositoryResolutionError,
    SyncError,
    TreeCreationError,
)
from codesyncer.services.github.helpers import RateLimitInfo, handle_error_response
from codesyncer.services.github.http_client import close_github_client
from codesyncer.services.github.oauth import GitHubOAuthClient
from codesyncer.services.github.read_operations import GitHubReadOperations
from codesyncer.services.github.service import GitHubService
from codesyncer.services.github.sync import SyncPipeline, sync_to_github
from codesyncer.services.github.transport import GitHubTransport
from codesyncer.services.github.types import (
    BlobRef,
    FileObject,
    GitHubUser,
    RefAction,
    RepositoryCoordinate,
    SyncContext,
    SyncResult,
    SyncStage,
    TreeEntry,
)
from codesyncer.services.github.write_operations import GitHubWriteOperations

__all__ = [
    # Service (main entry point)
    "GitHubService",
    "SyncPipeline",
    "sync_to_github",
    # Operation classes (for direct use if needed)
    "GitHubReadOperations",
    "GitHubWriteOperations",
    "GitHubTransport",
    "GitHubOAuthClient",
    # HTTP client lifecycle
    "close_github_client",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    "GitHubProtocolError",
    "GitHubRepoRenamed",
    "SyncError",
    "RepositoryResolutionError",
    "ReferenceReadError",
    "BlobCreationError",
    "TreeCreationError",
    "CommitCreationError",
    "ReferenceUpdateError",
    # Types
    "BlobRef",
    "FileObject",
    "GitHubUser",
    "RefAction",
    "RepositoryCoordinate",
    "SyncContext",
    "SyncResult",
    "SyncStage",
    "TreeEntry",
]
