"""Unit tests for application settings."""

from codesyncer.config.settings import Settings


class TestSettings:
    def test_defaults(self):
        s = Settings(_env_file=None)

        assert s.github_api_url == "https://api.github.com"
        assert s.github_web_url == "https://github.com"
        assert s.github_oauth_scope == "repo"
        assert s.github_oauth_enabled is False

    def test_oauth_enabled_needs_id_and_secret(self):
        assert Settings(_env_file=None, github_client_id="id").github_oauth_enabled is False
        assert (
            Settings(_env_file=None, github_client_id="id", github_client_secret="s").github_oauth_enabled
            is True
        )

    def test_default_commit_message(self):
        s = Settings(_env_file=None, commit_message_template="Push {count} files")

        assert s.default_commit_message(3) == "Push 3 files"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_BLOB_CONCURRENCY", "4")

        assert Settings(_env_file=None).github_blob_concurrency == 4
