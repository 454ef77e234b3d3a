"""
GitHub API service facade.

Bundles user lookup and the sync pipeline behind one object
constructed from an access token.
"""

from collections.abc import Sequence

from codesyncer.services.github.read_operations import GitHubReadOperations
from codesyncer.services.github.sync import StageCallback, SyncPipeline
from codesyncer.services.github.transport import GitHubTransport
from codesyncer.services.github.types import FileObject, GitHubUser, SyncResult


class GitHubService:
    """Service for interacting with GitHub REST API."""

    def __init__(self, token: str):
        self.token = token
        self.transport = GitHubTransport(token)
        self._reader = GitHubReadOperations(self.transport)

    async def get_authenticated_user(self) -> GitHubUser:
        return await self._reader.get_authenticated_user()

    async def sync_files(
        self,
        owner: str,
        repo_name: str,
        files: Sequence[FileObject],
        message: str | None = None,
        on_stage: StageCallback | None = None,
    ) -> SyncResult:
        """
        Commit files to owner/repo_name in one commit, creating the repo if needed.

        Raises:
            ValueError: On empty file list or blank owner/repo
            SyncError: Subclass naming the failed stage
        """
        pipeline = SyncPipeline(
            self.token, owner, repo_name, on_stage=on_stage, transport=self.transport
        )
        return await pipeline.run(files, message)
