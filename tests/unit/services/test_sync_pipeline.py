"""End-to-end tests of the sync pipeline against an in-memory GitHub.

Covers first sync to a missing/empty repository, sync on top of existing
history, repeated syncs, and failure injection at every stage.
"""

from __future__ import annotations

import pytest

from codesyncer.services.github.exceptions import (
    BlobCreationError,
    CommitCreationError,
    GitHubProtocolError,
    GitHubRepoRenamed,
    ReferenceReadError,
    ReferenceUpdateError,
    RepositoryResolutionError,
    SyncError,
    TreeCreationError,
)
from codesyncer.services.github.sync import SyncPipeline, sync_to_github
from codesyncer.services.github.types import FileObject, RefAction, SyncStage
from tests.helpers.fake_github import FakeGitHub

TOKEN = "ghp_test_token_12345"


def _pipeline(transport, repo: str = "hello", **kwargs) -> SyncPipeline:
    return SyncPipeline(TOKEN, "octocat", repo, transport=transport, **kwargs)


# ═══════════════════════════════════════════════════════════════════════════
# First sync
# ═══════════════════════════════════════════════════════════════════════════


class TestFirstSync:
    @pytest.mark.anyio
    async def test_missing_repository_end_to_end(self, fake_github: FakeGitHub, transport):
        """[a.txt] into a repo that does not exist: create, root commit, POST ref."""
        result = await _pipeline(transport).run([FileObject("a.txt", "hello")])

        assert result.url == "https://github.com/octocat/hello"
        assert result.created_repository is True
        assert result.ref_action is RefAction.CREATED
        assert result.parent_sha is None

        assert len(fake_github.called("POST", r"^/user/repos$")) == 1
        assert len(fake_github.called("POST", r"/git/blobs$")) == 1
        (tree_body,) = fake_github.called("POST", r"/git/trees$")
        assert "base_tree" not in tree_body
        (commit_body,) = fake_github.called("POST", r"/git/commits$")
        assert "parents" not in commit_body
        assert fake_github.called("PATCH", r"/git/refs/heads/") == []
        assert len(fake_github.called("POST", r"/git/refs$")) == 1

        assert fake_github.files_at("hello") == {"a.txt": "hello"}
        assert fake_github.tip("hello")["parents"] == []

    @pytest.mark.anyio
    async def test_existing_empty_repository(self, fake_github: FakeGitHub, transport):
        fake_github.add_repo("hello")
        files = [FileObject("README.md", "# hi"), FileObject("src/app.py", "print('x')")]

        result = await _pipeline(transport).run(files)

        assert result.created_repository is False
        assert result.ref_action is RefAction.CREATED
        assert fake_github.called("POST", r"^/user/repos$") == []
        assert fake_github.files_at("hello") == {"README.md": "# hi", "src/app.py": "print('x')"}
        assert fake_github.tip("hello")["parents"] == []

    @pytest.mark.anyio
    async def test_visits_every_stage_in_order(self, transport):
        seen: list[SyncStage] = []

        result = await _pipeline(transport, on_stage=seen.append).run([FileObject("a.txt", "a")])

        expected = [
            SyncStage.RESOLVE_REPO,
            SyncStage.READ_REF,
            SyncStage.CREATE_BLOBS,
            SyncStage.CREATE_TREE,
            SyncStage.CREATE_COMMIT,
            SyncStage.UPDATE_REF,
            SyncStage.DONE,
        ]
        assert seen == expected
        assert result.stages == [SyncStage.START, *expected]

    @pytest.mark.anyio
    async def test_default_commit_message_counts_files(self, fake_github: FakeGitHub, transport):
        files = [FileObject("a.txt", "a"), FileObject("b.txt", "b")]

        await _pipeline(transport).run(files)

        assert fake_github.tip("hello")["message"] == "Sync 2 files via CodeSyncer AI"

    @pytest.mark.anyio
    async def test_custom_commit_message(self, fake_github: FakeGitHub, transport):
        await _pipeline(transport).run([FileObject("a.txt", "a")], message="Initial import")

        assert fake_github.tip("hello")["message"] == "Initial import"


# ═══════════════════════════════════════════════════════════════════════════
# Sync on top of history
# ═══════════════════════════════════════════════════════════════════════════


class TestSyncWithHistory:
    @pytest.mark.anyio
    async def test_single_parent_and_base_tree_preserved(self, fake_github: FakeGitHub, transport):
        fake_github.add_repo("hello", {"keep.txt": "untouched", "a.txt": "old"})
        prior_tip = fake_github.tip("hello")["sha"]

        result = await _pipeline(transport).run(
            [FileObject("a.txt", "new"), FileObject("docs/new.md", "added")]
        )

        assert result.parent_sha == prior_tip
        assert result.ref_action is RefAction.UPDATED
        assert fake_github.tip("hello")["parents"] == [prior_tip]
        assert fake_github.files_at("hello") == {
            "keep.txt": "untouched",
            "a.txt": "new",
            "docs/new.md": "added",
        }
        (tree_body,) = fake_github.called("POST", r"/git/trees$")
        assert tree_body["base_tree"] == fake_github.commits[prior_tip]["tree"]
        assert fake_github.called("POST", r"/git/refs$") == []

    @pytest.mark.anyio
    async def test_non_main_default_branch(self, fake_github: FakeGitHub, transport):
        fake_github.add_repo("hello", {"x.txt": "x"}, branch="develop")

        result = await _pipeline(transport).run([FileObject("y.txt", "y")])

        assert result.branch == "develop"
        assert fake_github.files_at("hello") == {"x.txt": "x", "y.txt": "y"}

    @pytest.mark.anyio
    async def test_repeated_sync_gives_same_tree_new_commit(self, fake_github: FakeGitHub, transport):
        files = [FileObject("a.txt", "hello"), FileObject("b/c.txt", "world")]

        first = await _pipeline(transport).run(files)
        second = await _pipeline(transport).run(files)

        assert first.tree_sha == second.tree_sha
        assert first.commit_sha != second.commit_sha
        assert second.parent_sha == first.commit_sha
        assert second.created_repository is False
        assert second.ref_action is RefAction.UPDATED

    @pytest.mark.anyio
    async def test_tree_entries_follow_input_order(self, fake_github: FakeGitHub, transport):
        files = [FileObject(p, p) for p in ("z.txt", "a.txt", "m/n.txt")]

        await _pipeline(transport).run(files)

        (tree_body,) = fake_github.called("POST", r"/git/trees$")
        assert [e["path"] for e in tree_body["tree"]] == ["z.txt", "a.txt", "m/n.txt"]
        assert all(e["mode"] == "100644" and e["type"] == "blob" for e in tree_body["tree"])


# ═══════════════════════════════════════════════════════════════════════════
# Failure injection
# ═══════════════════════════════════════════════════════════════════════════


class TestStageFailures:
    @pytest.mark.anyio
    async def test_repository_creation_failure_aborts_before_any_git_object(
        self, fake_github: FakeGitHub, transport
    ):
        fake_github.fail("POST", r"^/user/repos$", 422, "name already exists on this account")
        pipeline = _pipeline(transport)

        with pytest.raises(RepositoryResolutionError) as exc_info:
            await pipeline.run([FileObject("a.txt", "a")])

        assert exc_info.value.stage is SyncStage.RESOLVE_REPO
        assert "create repository" in exc_info.value.message
        assert pipeline.stage is SyncStage.FAILED
        assert not any("/git/" in path for _, path, _ in fake_github.calls)

    @pytest.mark.anyio
    async def test_existence_check_failure(self, fake_github: FakeGitHub, transport):
        fake_github.fail("GET", r"^/repos/octocat/hello$", 500, "boom")

        with pytest.raises(RepositoryResolutionError, match="check repository existence"):
            await _pipeline(transport).run([FileObject("a.txt", "a")])

    @pytest.mark.anyio
    async def test_renamed_repository_names_new_location(self, fake_github: FakeGitHub, transport):
        fake_github.fail(
            "GET",
            r"^/repos/octocat/old$",
            301,
            "Moved Permanently",
            headers={"Location": "https://api.github.com/repos/octocat/new"},
        )
        pipeline = _pipeline(transport, repo="old")

        with pytest.raises(RepositoryResolutionError) as exc_info:
            await pipeline.run([FileObject("a.txt", "a")])

        assert isinstance(exc_info.value.cause, GitHubRepoRenamed)
        assert exc_info.value.cause.new_full_name == "octocat/new"
        assert "octocat/old -> octocat/new" in exc_info.value.message
        assert exc_info.value.status_code == 301
        assert pipeline.stage is SyncStage.FAILED
        assert fake_github.called("POST", r"^/user/repos$") == []

    @pytest.mark.anyio
    async def test_non_object_repository_body_fails_ref_read(self, fake_github: FakeGitHub, transport):
        fake_github.add_repo("hello", {"a.txt": "a"})
        fake_github.fail("GET", r"^/repos/octocat/hello$", 200, body=[])
        pipeline = _pipeline(transport)

        with pytest.raises(ReferenceReadError) as exc_info:
            await pipeline.run([FileObject("a.txt", "b")])

        assert isinstance(exc_info.value.cause, GitHubProtocolError)
        assert "get repository info" in exc_info.value.message
        assert pipeline.stage is SyncStage.FAILED
        assert pipeline.history[-1] is SyncStage.FAILED
        assert fake_github.called("POST", r"/git/blobs$") == []

    @pytest.mark.anyio
    async def test_ref_read_server_error(self, fake_github: FakeGitHub, transport):
        fake_github.add_repo("hello", {"a.txt": "a"})
        fake_github.fail("GET", r"/git/ref/heads/", 502, "Bad Gateway")

        with pytest.raises(ReferenceReadError, match="get branch reference") as exc_info:
            await _pipeline(transport).run([FileObject("a.txt", "b")])

        assert exc_info.value.status_code == 502
        assert fake_github.called("POST", r"/git/blobs$") == []

    @pytest.mark.anyio
    async def test_blob_failure_creates_no_tree_or_commit(self, fake_github: FakeGitHub, transport):
        fake_github.add_repo("hello", {"a.txt": "a"})
        prior_tip = fake_github.tip("hello")["sha"]
        fake_github.fail("POST", r"/git/blobs$", 403, "Resource not accessible")

        with pytest.raises(BlobCreationError) as exc_info:
            await _pipeline(transport).run([FileObject("a.txt", "b"), FileObject("c.txt", "c")])

        assert exc_info.value.stage is SyncStage.CREATE_BLOBS
        assert "create blob for" in exc_info.value.message
        assert fake_github.called("POST", r"/git/trees$") == []
        assert fake_github.called("POST", r"/git/commits$") == []
        assert fake_github.tip("hello")["sha"] == prior_tip

    @pytest.mark.anyio
    async def test_tree_failure(self, fake_github: FakeGitHub, transport):
        fake_github.fail("POST", r"/git/trees$", 422, "Invalid tree info")

        with pytest.raises(TreeCreationError, match="create file tree: Invalid tree info"):
            await _pipeline(transport).run([FileObject("a.txt", "a")])

        assert fake_github.called("POST", r"/git/commits$") == []

    @pytest.mark.anyio
    async def test_commit_failure(self, fake_github: FakeGitHub, transport):
        fake_github.fail("POST", r"/git/commits$", 500, "oops")

        with pytest.raises(CommitCreationError) as exc_info:
            await _pipeline(transport).run([FileObject("a.txt", "a")])

        assert exc_info.value.stage is SyncStage.CREATE_COMMIT
        assert fake_github.called("POST", r"/git/refs$") == []

    @pytest.mark.anyio
    async def test_commit_without_sha_is_protocol_violation(self, fake_github: FakeGitHub, transport):
        fake_github.fail("POST", r"/git/commits$", 201, "created")

        with pytest.raises(CommitCreationError) as exc_info:
            await _pipeline(transport).run([FileObject("a.txt", "a")])

        assert isinstance(exc_info.value.cause, GitHubProtocolError)
        assert "did not return sha" in exc_info.value.message

    @pytest.mark.anyio
    async def test_ref_update_and_creation_both_fail(self, fake_github: FakeGitHub, transport):
        fake_github.add_repo("hello", {"a.txt": "a"})
        fake_github.fail("PATCH", r"/git/refs/heads/main$", 422, "Update is not a fast forward")
        fake_github.fail("POST", r"/git/refs$", 422, "Reference already exists")

        with pytest.raises(ReferenceUpdateError) as exc_info:
            await _pipeline(transport).run([FileObject("a.txt", "b")])

        assert "create branch reference: Reference already exists" in exc_info.value.message

    @pytest.mark.anyio
    async def test_failed_run_is_instance_of_sync_error(self, fake_github: FakeGitHub, transport):
        fake_github.fail("POST", r"/git/trees$", 500, "x")

        with pytest.raises(SyncError):
            await _pipeline(transport).run([FileObject("a.txt", "a")])


# ═══════════════════════════════════════════════════════════════════════════
# Input validation
# ═══════════════════════════════════════════════════════════════════════════


class TestInputValidation:
    @pytest.mark.anyio
    async def test_empty_file_list_rejected_before_network(self, fake_github: FakeGitHub, transport):
        with pytest.raises(ValueError, match="At least one file"):
            await _pipeline(transport).run([])

        assert fake_github.calls == []

    def test_blank_repository_name_rejected(self):
        with pytest.raises(ValueError, match="owner and name"):
            SyncPipeline(TOKEN, "octocat", "")

    @pytest.mark.parametrize("path", ["", "/abs.txt", "a//b.txt", "../up.txt", "a\\b.txt", "dir/"])
    def test_invalid_paths_rejected(self, path):
        with pytest.raises(ValueError):
            FileObject(path, "x")


class TestSyncToGithub:
    @pytest.mark.anyio
    async def test_returns_repository_url(self, fake_github: FakeGitHub, github_http, monkeypatch):
        monkeypatch.setattr(
            "codesyncer.services.github.transport.get_github_client", lambda: github_http
        )

        url = await sync_to_github(TOKEN, "octocat", "hello", [FileObject("a.txt", "hello")])

        assert url == "https://github.com/octocat/hello"
        assert fake_github.files_at("hello") == {"a.txt": "hello"}
