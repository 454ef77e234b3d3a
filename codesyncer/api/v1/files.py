"""File set preview endpoint."""

from dataclasses import asdict

from fastapi import APIRouter

from codesyncer.schemas import FileTreeRequest, FileTreeResponse, TreeNodeOut
from codesyncer.services.file_tree import build_file_tree, count_files

router = APIRouter(prefix="/files", tags=["files"])


@router.post("/tree", response_model=FileTreeResponse)
async def preview_file_tree(data: FileTreeRequest) -> FileTreeResponse:
    """Lay out the files that would be synced as a folder/file tree."""
    tree = build_file_tree(f.to_file_object() for f in data.files)
    return FileTreeResponse(
        tree=[TreeNodeOut.model_validate(asdict(node)) for node in tree],
        file_count=count_files(tree),
    )
