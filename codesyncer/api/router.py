from fastapi import APIRouter

from codesyncer.api.v1 import auth, files, github

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)
api_router.include_router(github.router)
api_router.include_router(files.router)
