"""
GitHub endpoints: current account and single-commit sync of a file set.
"""

import logging

from fastapi import APIRouter

from codesyncer.api.deps import GitHubToken
from codesyncer.api.errors import github_http_exception, sync_http_exception
from codesyncer.core.exceptions import ValidationError
from codesyncer.schemas import GitHubUserResponse, SyncRequest, SyncStatusResponse
from codesyncer.services.github import GitHubAPIError, GitHubService, SyncError

router = APIRouter(prefix="/github", tags=["github"])
logger = logging.getLogger(__name__)


@router.get("/user", response_model=GitHubUserResponse)
async def get_github_user(token: GitHubToken) -> GitHubUserResponse:
    """Return the GitHub account the bearer token belongs to."""
    github = GitHubService(token)
    try:
        user = await github.get_authenticated_user()
    except GitHubAPIError as e:
        raise github_http_exception(e) from None

    return GitHubUserResponse(login=user.login, avatar_url=user.avatar_url, name=user.name)


@router.post("/sync", response_model=SyncStatusResponse)
async def sync_files(data: SyncRequest, token: GitHubToken) -> SyncStatusResponse:
    """
    Push the given files to a repository of the authenticated user as one commit.

    The repository is created if it does not exist. Files already in the
    repository but absent from the request are left untouched.
    """
    github = GitHubService(token)

    try:
        user = await github.get_authenticated_user()
    except GitHubAPIError as e:
        raise github_http_exception(e) from None

    files = [f.to_file_object() for f in data.files]
    try:
        result = await github.sync_files(user.login, data.repo_name, files, message=data.message)
    except SyncError as e:
        raise sync_http_exception(e) from None
    except ValueError as e:
        raise ValidationError(str(e)) from None

    logger.info(
        f"Synced {result.files_synced} files to {user.login}/{data.repo_name} "
        f"({result.ref_action.value} {result.branch} -> {result.commit_sha[:7]})"
    )
    return SyncStatusResponse(
        state="success",
        message="Successfully synced to GitHub!",
        url=result.url,
        commit_sha=result.commit_sha,
        branch=result.branch,
        files_synced=result.files_synced,
        created_repository=result.created_repository,
        ref_action=result.ref_action.value,
    )
