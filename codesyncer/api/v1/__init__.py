from codesyncer.api.v1 import auth, files, github

__all__ = [
    "auth",
    "files",
    "github",
]
