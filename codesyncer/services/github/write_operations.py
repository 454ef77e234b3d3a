"""
GitHub API write operations.

Provides the Git Data API mutations a sync is built from:
- Creating the target repository when it does not exist
- Uploading blobs (in parallel)
- Creating a tree layered on the previous tree
- Creating the commit object
- Moving (or creating) the branch reference
"""

import asyncio
import logging

from codesyncer.config import settings
from codesyncer.services.github.constants import BLOB_ENCODING, BRANCH_REF_PREFIX
from codesyncer.services.github.exceptions import GitHubAPIError
from codesyncer.services.github.helpers import handle_error_response
from codesyncer.services.github.transport import GitHubTransport, require_field
from codesyncer.services.github.types import (
    BlobRef,
    FileObject,
    RefAction,
    RepositoryCoordinate,
    TreeEntry,
)

logger = logging.getLogger(__name__)


class GitHubWriteOperations:
    """
    Write operations for GitHub API.

    Uses the Git Data API so that the whole file set lands as one commit.
    Objects created before a failure (blobs, trees, commits) are left as
    unreferenced orphans; only update_ref changes visible history.
    """

    def __init__(self, transport: GitHubTransport):
        self.transport = transport

    async def ensure_repository_exists(
        self,
        repo: RepositoryCoordinate,
        description: str | None = None,
    ) -> bool:
        """
        Create the repository under the authenticated user if it is absent.

        Safe to call repeatedly.

        Args:
            repo: Target repository
            description: Description for a newly created repository

        Returns:
            True if the repository was created, False if it already existed

        Raises:
            GitHubAPIError: If the existence check returns anything but 2xx/404,
                or if creation fails
        """
        action = "check repository existence"
        response = await self.transport.send("GET", repo.api_path, action)
        if response.is_success:
            return False
        if response.status_code != 404:
            handle_error_response(response, action, repo.full_name)

        logger.info(f"Repository {repo.full_name} not found, creating it")
        await self.transport.request(
            "POST",
            "/user/repos",
            "create repository",
            json={
                "name": repo.name,
                "description": description or settings.repository_description,
            },
        )
        return True

    async def create_blob(self, repo: RepositoryCoordinate, file: FileObject) -> BlobRef:
        """Upload one file's content as a blob."""
        action = f"create blob for {file.path}"
        data = await self.transport.request(
            "POST",
            f"{repo.api_path}/git/blobs",
            action,
            json={"content": file.content, "encoding": BLOB_ENCODING},
        )
        return BlobRef(path=file.path, sha=require_field(data, action, "sha"))

    async def create_blobs(
        self,
        repo: RepositoryCoordinate,
        files: list[FileObject],
        max_concurrent: int | None = None,
    ) -> list[BlobRef]:
        """
        Upload every file as a blob, concurrently.

        All-or-nothing: the first failure is raised and the uploads still in
        flight are cancelled, since a partial blob set cannot be committed.

        Args:
            repo: Target repository
            files: Files to upload
            max_concurrent: Maximum uploads in flight (default: settings.github_blob_concurrency)

        Returns:
            One BlobRef per file, in input order
        """
        semaphore = asyncio.Semaphore(max_concurrent or settings.github_blob_concurrency)

        async def create_with_limit(file: FileObject) -> BlobRef:
            async with semaphore:
                return await self.create_blob(repo, file)

        tasks = [asyncio.ensure_future(create_with_limit(f)) for f in files]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def create_tree(
        self,
        repo: RepositoryCoordinate,
        entries: list[TreeEntry],
        base_tree_sha: str | None = None,
    ) -> str:
        """
        Create a tree from the given entries.

        With a base tree, GitHub keeps every path of the base that is not in
        entries and overwrites the ones that are.

        Returns:
            The new tree SHA
        """
        action = "create file tree"
        body: dict[str, object] = {"tree": [entry.to_payload() for entry in entries]}
        if base_tree_sha:
            body["base_tree"] = base_tree_sha

        data = await self.transport.request("POST", f"{repo.api_path}/git/trees", action, json=body)
        return require_field(data, action, "sha")

    async def create_commit(
        self,
        repo: RepositoryCoordinate,
        tree_sha: str,
        parent_sha: str | None,
        message: str,
    ) -> str:
        """
        Create a commit pointing at tree_sha.

        A None parent makes a root commit.

        Returns:
            The new commit SHA

        Raises:
            GitHubProtocolError: If GitHub answers 2xx without a commit SHA
        """
        action = "create commit"
        body: dict[str, object] = {"message": message, "tree": tree_sha}
        if parent_sha:
            body["parents"] = [parent_sha]

        data = await self.transport.request(
            "POST", f"{repo.api_path}/git/commits", action, json=body
        )
        return require_field(data, action, "sha")

    async def update_ref(
        self,
        repo: RepositoryCoordinate,
        branch: str,
        commit_sha: str,
        ref_exists: bool = True,
    ) -> RefAction:
        """
        Point the branch at commit_sha, creating the branch ref if needed.

        Two-branch transition: try to update the existing ref; on any failure
        create the ref instead, and surface only the creation failure. When
        the caller already knows the ref is absent (first commit to an empty
        repository) the update attempt is skipped.

        Args:
            repo: Target repository
            branch: Branch name, without "refs/heads/"
            commit_sha: Commit the branch should point at
            ref_exists: False if the branch ref is known not to exist

        Returns:
            RefAction.UPDATED or RefAction.CREATED

        Raises:
            GitHubAPIError: If the ref could be neither updated nor created
        """
        if ref_exists:
            try:
                response = await self.transport.send(
                    "PATCH",
                    f"{repo.api_path}/git/refs/heads/{branch}",
                    "update branch reference",
                    json={"sha": commit_sha},
                )
            except GitHubAPIError as e:
                logger.warning(f"Updating {repo.full_name}@{branch} failed ({e.message}), creating ref")
            else:
                if response.is_success:
                    return RefAction.UPDATED
                logger.warning(
                    f"Updating {repo.full_name}@{branch} returned {response.status_code}, creating ref"
                )

        await self.transport.request(
            "POST",
            f"{repo.api_path}/git/refs",
            "create branch reference",
            json={"ref": f"{BRANCH_REF_PREFIX}{branch}", "sha": commit_sha},
        )
        return RefAction.CREATED
