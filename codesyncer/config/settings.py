from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]
    frontend_url: str = "http://localhost:3000"  # Default OAuth redirect target

    # GitHub REST API
    github_api_url: str = "https://api.github.com"
    github_web_url: str = "https://github.com"
    github_api_version: str = "2022-11-28"
    github_timeout_seconds: float = 30.0
    github_connect_timeout_seconds: float = 5.0
    github_max_connections: int = 20
    # Upper bound on blob uploads in flight during one sync
    github_blob_concurrency: int = 20

    # GitHub OAuth app - held by the server only, never shipped to clients
    # Empty client id = OAuth login disabled (token must be supplied directly)
    github_client_id: str = ""
    github_client_secret: str = ""
    github_oauth_scope: str = "repo"

    # Sync defaults
    repository_description: str = "Repository created by CodeSyncer AI"
    # {count} is replaced by the number of synced files
    commit_message_template: str = "Sync {count} files via CodeSyncer AI"

    @property
    def github_oauth_enabled(self) -> bool:
        """Check if the GitHub OAuth app is configured."""
        return bool(self.github_client_id and self.github_client_secret)

    def default_commit_message(self, file_count: int) -> str:
        """Render the default commit message for a sync of file_count files."""
        return self.commit_message_template.format(count=file_count)


settings = Settings()
