"""Pydantic schemas for sync and file preview endpoints."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from codesyncer.services.github.types import FileObject, validate_file_path


class FileObjectIn(BaseModel):
    """One file of a sync or preview request."""

    path: str = Field(..., min_length=1, description="Repository-relative, forward-slash path")
    content: str

    @field_validator("path")
    @classmethod
    def _check_path(cls, v: str) -> str:
        return validate_file_path(v)

    def to_file_object(self) -> FileObject:
        return FileObject(path=self.path, content=self.content)


class SyncRequest(BaseModel):
    """Request body for POST /github/sync."""

    repo_name: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9._-]+$")
    files: list[FileObjectIn] = Field(..., min_length=1)
    message: str | None = Field(None, min_length=1, description="Commit message override")


class SyncStatusResponse(BaseModel):
    """Result of a sync run."""

    state: Literal["success"] = "success"
    message: str
    url: str | None = None
    commit_sha: str | None = None
    branch: str | None = None
    files_synced: int = 0
    created_repository: bool = False
    ref_action: str | None = None  # "updated", "created"


class FileTreeRequest(BaseModel):
    """Request body for POST /files/tree."""

    files: list[FileObjectIn]


class TreeNodeOut(BaseModel):
    """A folder or file in the preview tree."""

    name: str
    type: Literal["folder", "file"]
    path: str
    children: list["TreeNodeOut"] | None = None
    content: str | None = None


class FileTreeResponse(BaseModel):
    tree: list[TreeNodeOut]
    file_count: int
