"""Monitor configuration loaded from environment variables."""
import os

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Monitor configuration loaded from environment variables.

    Attributes:
        directory: Directory to watch.
        name_filter: Shell-style file name filter.
        recursive: Watch subdirectories as well.
        propagate_observer_errors: Let observer failures abort delivery.
        debug: Enable debug-level logging.
        json_logs: Render logs as JSON lines instead of console text.
        shutdown_timeout: Seconds to wait for the watch thread on exit.
    """

    model_config = SettingsConfigDict(
        env_prefix="FILEMONITOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    directory: str = "."
    name_filter: str = "*.*"
    recursive: bool = False
    propagate_observer_errors: bool = False
    debug: bool = False
    json_logs: bool = True
    shutdown_timeout: float = 5.0

    @computed_field
    @property
    def directory_path(self) -> str:
        """Absolute form of the watched directory.

        Returns:
            Absolute directory path.
        """
        return os.path.abspath(os.path.expanduser(self.directory))
