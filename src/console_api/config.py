"""Service configuration loaded from environment variables."""
from datetime import timedelta
from pathlib import Path
from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration loaded from environment variables.

    Attributes:
        host: Bind address for the API server.
        port: Port number for the API server.
        debug: Enable debug logging and API documentation.
        log_json: Emit JSON log lines; False renders for a terminal.
        catalog_path: YAML catalog describing the content stores.
        drafts_dir: Directory holding auto-saved drafts.
        security_enabled: When False every permission check passes.
        tree_sort: Sibling label order.
        gather_max_workers: Upper bound on concurrent source adapters.
        gather_timeout: Seconds to wait for all adapters, None for no limit.
        draft_retention_days: Days an auto-saved draft is kept.
        default_locale: Locale used when the request names none.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONSOLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_json: bool = True

    catalog_path: Path = Path("catalog.yaml")
    drafts_dir: Path = Path("autosave")
    security_enabled: bool = True

    tree_sort: Literal["ascending", "descending"] = "ascending"
    gather_max_workers: int = 6
    gather_timeout: float | None = 60.0
    draft_retention_days: int = 7
    default_locale: str = "en"

    @computed_field
    @property
    def sort_ascending(self) -> bool:
        """Whether sibling labels sort A-Z.

        Returns:
            True for ascending tree sort.
        """
        return self.tree_sort == "ascending"

    @computed_field
    @property
    def draft_retention(self) -> timedelta:
        """Retention window for auto-saved drafts.

        Returns:
            Draft retention as a timedelta.
        """
        return timedelta(days=self.draft_retention_days)
