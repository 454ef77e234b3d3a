"""
Single-commit sync of a file set to a GitHub repository.

The run is a linear state machine:

    START -> RESOLVE_REPO -> READ_REF -> CREATE_BLOBS -> CREATE_TREE
          -> CREATE_COMMIT -> UPDATE_REF -> DONE

FAILED is reachable from any state and terminal. Each stage starts only
after its predecessor finished, because it needs the identifier the
predecessor produced. Blob uploads within CREATE_BLOBS run concurrently.
Failures are raised as the SyncError subclass of the stage they hit.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from codesyncer.config import settings
from codesyncer.services.github.exceptions import (
    BlobCreationError,
    CommitCreationError,
    GitHubAPIError,
    ReferenceReadError,
    ReferenceUpdateError,
    RepositoryResolutionError,
    SyncError,
    TreeCreationError,
)
from codesyncer.services.github.read_operations import GitHubReadOperations
from codesyncer.services.github.transport import GitHubTransport
from codesyncer.services.github.types import (
    FileObject,
    RepositoryCoordinate,
    SyncResult,
    SyncStage,
    TreeEntry,
)
from codesyncer.services.github.write_operations import GitHubWriteOperations

logger = logging.getLogger(__name__)

T = TypeVar("T")

StageCallback = Callable[[SyncStage], None]


class SyncPipeline:
    """
    One sync run against one repository.

    Builds its context from scratch on every run; nothing is shared between
    runs. Two concurrent runs against the same repository race at the server
    (the last ref update wins), so callers that care must serialize them.
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo_name: str,
        on_stage: StageCallback | None = None,
        transport: GitHubTransport | None = None,
    ):
        if not owner or not repo_name:
            raise ValueError("Repository owner and name are required")
        self.repo = RepositoryCoordinate(owner=owner, name=repo_name)
        self.transport = transport or GitHubTransport(token)
        self.reader = GitHubReadOperations(self.transport)
        self.writer = GitHubWriteOperations(self.transport)
        self.on_stage = on_stage
        self.stage = SyncStage.START
        self.history: list[SyncStage] = [SyncStage.START]

    @property
    def repository_url(self) -> str:
        return f"{settings.github_web_url.rstrip('/')}/{self.repo.full_name}"

    def _enter(self, stage: SyncStage) -> None:
        self.stage = stage
        self.history.append(stage)
        logger.info(f"[{self.repo.full_name}] {stage.value}")
        if self.on_stage:
            self.on_stage(stage)

    async def _step(
        self,
        stage: SyncStage,
        error_cls: type[SyncError],
        awaitable: Awaitable[T],
    ) -> T:
        self._enter(stage)
        try:
            return await awaitable
        except GitHubAPIError as e:
            logger.error(f"[{self.repo.full_name}] sync failed at {stage.value}: {e.message}")
            self._enter(SyncStage.FAILED)
            raise error_cls(e) from e

    async def run(self, files: Sequence[FileObject], message: str | None = None) -> SyncResult:
        """
        Push files to the repository's default branch as a single commit.

        Creates the repository if needed. Existing paths not in files are
        preserved; paths in files are added or overwritten.

        Args:
            files: Non-empty list of files to sync
            message: Commit message (default: settings.commit_message_template)

        Returns:
            SyncResult carrying the repository URL and new commit SHA

        Raises:
            ValueError: If files is empty
            SyncError: Subclass naming the stage that failed
        """
        if not files:
            raise ValueError("At least one file is required to sync")
        files = list(files)
        message = message or settings.default_commit_message(len(files))

        created = await self._step(
            SyncStage.RESOLVE_REPO,
            RepositoryResolutionError,
            self.writer.ensure_repository_exists(self.repo),
        )

        context = await self._step(
            SyncStage.READ_REF,
            ReferenceReadError,
            self.reader.get_latest_commit_info(self.repo),
        )

        blobs = await self._step(
            SyncStage.CREATE_BLOBS,
            BlobCreationError,
            self.writer.create_blobs(self.repo, files),
        )

        tree_sha = await self._step(
            SyncStage.CREATE_TREE,
            TreeCreationError,
            self.writer.create_tree(
                self.repo,
                [TreeEntry.from_blob(blob) for blob in blobs],
                context.base_tree_sha,
            ),
        )

        commit_sha = await self._step(
            SyncStage.CREATE_COMMIT,
            CommitCreationError,
            self.writer.create_commit(self.repo, tree_sha, context.latest_commit_sha, message),
        )

        ref_action = await self._step(
            SyncStage.UPDATE_REF,
            ReferenceUpdateError,
            self.writer.update_ref(
                self.repo,
                context.default_branch,
                commit_sha,
                ref_exists=not context.is_empty,
            ),
        )

        self._enter(SyncStage.DONE)
        return SyncResult(
            url=self.repository_url,
            commit_sha=commit_sha,
            tree_sha=tree_sha,
            branch=context.default_branch,
            files_synced=len(files),
            created_repository=created,
            ref_action=ref_action,
            parent_sha=context.latest_commit_sha,
            stages=list(self.history),
        )


async def sync_to_github(
    token: str,
    owner: str,
    repo_name: str,
    files: Sequence[FileObject],
    message: str | None = None,
) -> str:
    """Sync files to owner/repo_name and return the repository URL."""
    result = await SyncPipeline(token, owner, repo_name).run(files, message)
    return result.url
