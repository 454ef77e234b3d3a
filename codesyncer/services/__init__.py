# Services package

from codesyncer.services.file_tree import TreeNode, build_file_tree, count_files
from codesyncer.services.github import GitHubOAuthClient, GitHubService, SyncPipeline

__all__ = [
    "GitHubOAuthClient",
    "GitHubService",
    "SyncPipeline",
    "TreeNode",
    "build_file_tree",
    "count_files",
]
