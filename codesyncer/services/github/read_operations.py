"""
GitHub API read operations.

Provides the read-only calls the sync pipeline depends on:
- Authenticated user lookup (owner login for a sync)
- Repository metadata
- Branch tip and base tree of the default branch
"""

import logging
from typing import Any

from codesyncer.services.github.constants import DEFAULT_BRANCH, EMPTY_HISTORY_STATUSES
from codesyncer.services.github.exceptions import GitHubProtocolError
from codesyncer.services.github.helpers import handle_error_response
from codesyncer.services.github.transport import GitHubTransport, parse_json, require_field
from codesyncer.services.github.types import GitHubUser, RepositoryCoordinate, SyncContext

logger = logging.getLogger(__name__)


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    Nothing is cached: every sync re-reads remote state so two runs never
    share a stale branch tip.
    """

    def __init__(self, transport: GitHubTransport):
        self.transport = transport

    async def get_authenticated_user(self) -> GitHubUser:
        """
        Fetch the account the token belongs to.

        Returns:
            GitHubUser with login, avatar and display name
        """
        action = "get user information"
        data = await self.transport.request("GET", "/user", action)
        return GitHubUser(
            login=require_field(data, action, "login"),
            avatar_url=data.get("avatar_url"),
            name=data.get("name"),
        )

    async def get_repository(self, repo: RepositoryCoordinate) -> dict[str, Any]:
        """Fetch raw repository metadata."""
        action = "get repository info"
        data = await self.transport.request("GET", repo.api_path, action)
        if not isinstance(data, dict):
            raise GitHubProtocolError(
                f"Failed to {action}: GitHub returned {type(data).__name__} instead of an object",
                action=action,
            )
        return data

    async def get_latest_commit_info(self, repo: RepositoryCoordinate) -> SyncContext:
        """
        Determine the default branch, its tip commit and that commit's tree.

        A missing branch reference means the repository has no history yet;
        that yields a context with None SHAs rather than an error. Any other
        failure (auth, rate limit, 5xx, network) propagates.

        Args:
            repo: Target repository

        Returns:
            SyncContext for the default branch

        Raises:
            GitHubAPIError: If any read fails for a reason other than absent history
            GitHubProtocolError: If a response lacks the expected SHA
        """
        repo_info = await self.get_repository(repo)
        default_branch = repo_info.get("default_branch") or DEFAULT_BRANCH

        action = "get branch reference"
        ref_response = await self.transport.send(
            "GET", f"{repo.api_path}/git/ref/heads/{default_branch}", action
        )
        if ref_response.status_code in EMPTY_HISTORY_STATUSES:
            logger.info(
                f"No '{default_branch}' ref in {repo.full_name} "
                f"(status {ref_response.status_code}); treating as empty repository"
            )
            return SyncContext(default_branch=default_branch)
        handle_error_response(ref_response, action, repo.full_name)
        latest_commit_sha = require_field(parse_json(ref_response, action), action, "object", "sha")

        action = "get latest commit"
        commit_data = await self.transport.request(
            "GET", f"{repo.api_path}/git/commits/{latest_commit_sha}", action
        )
        base_tree_sha = require_field(commit_data, action, "tree", "sha")

        return SyncContext(
            default_branch=default_branch,
            latest_commit_sha=latest_commit_sha,
            base_tree_sha=base_tree_sha,
        )
