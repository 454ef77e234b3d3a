"""Constants for GitHub service."""

# Media type for the GitHub REST v3 JSON API
GITHUB_JSON_MEDIA_TYPE = "application/vnd.github.v3+json"

# Branch assumed when the repository metadata carries no default_branch
DEFAULT_BRANCH = "main"

# Git tree entry attributes for a regular (non-executable) file
REGULAR_FILE_MODE = "100644"
BLOB_TYPE = "blob"

# Encoding the blob endpoint is told the content is in
BLOB_ENCODING = "utf-8"

# Ref namespace for branches
BRANCH_REF_PREFIX = "refs/heads/"

# Status codes GitHub uses on git ref reads for a repository with no history.
# 404: branch ref absent. 409: "Git Repository is empty."
EMPTY_HISTORY_STATUSES: frozenset[int] = frozenset({404, 409})
