"""Configuration service.

``ConfigService`` owns ``config.json`` and the per-context credential files
under the platform config directory, and decides once per process where the
workspace snapshot is stored:

- a local context always uses its SQLite vault
- a remote context uses the cloud store when it has a user identity and a
  token, and otherwise falls back to the default local vault
"""

from __future__ import annotations

import json
from functools import lru_cache
from json import JSONDecodeError
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from focusflow_cli.models.config_models import AppConfig, Context
from focusflow_cli.models.storage_strategy import (
    LocalStorageStrategy,
    RemoteStorageStrategy,
    StorageStrategyContext,
)
from focusflow_cli.utils.logger import get_logger

APP_NAME = "focusflow_cli"
DEFAULT_CLOUD_URL = "https://focusflow.app/api"


class ConfigService:
    """Loads, edits and persists the CLI configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.credentials_dir = self.config_dir / "credentials"
        self.data_dir = Path(user_data_dir(APP_NAME))

        for directory in (self.config_dir, self.credentials_dir, self.data_dir):
            directory.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        self._storage_strategy_context: StorageStrategyContext | None = None

    @property
    def config(self) -> AppConfig:
        return self.load_config()

    @property
    def local_db_path(self) -> str:
        """Vault used by the default local context and by cloud fallback."""
        return str(self.data_dir / "focusflow.db")

    @property
    def storage_strategy_context(self) -> StorageStrategyContext:
        """Storage chosen for the current context, built on first access."""
        if self._storage_strategy_context is None:
            self._storage_strategy_context = self.build_storage_strategy_context()
        return self._storage_strategy_context

    def _invalidate_storage(self) -> None:
        self._storage_strategy_context = None

    # ------------------------------------------------------------------
    # config.json
    # ------------------------------------------------------------------

    def load_config(self) -> AppConfig:
        """Read config.json, writing the defaults on first run.

        Raises:
            RuntimeError: If the file exists but cannot be parsed
        """
        if self._config is None:
            if not self.config_path.exists():
                self._config = self.create_default_config()
            else:
                try:
                    raw = self.config_path.read_text(encoding="utf-8")
                    self._config = AppConfig.model_validate_json(raw)
                except (OSError, ValueError) as e:
                    raise RuntimeError(f"Failed to load config: {e}") from e
        return self._config

    def save_config(self) -> None:
        """Write config.json, readable by the owner only."""
        if self._config is None:
            return
        try:
            self.config_path.write_text(self._config.model_dump_json(indent=4), encoding="utf-8")
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def create_default_config(self) -> AppConfig:
        """A local context (active) plus a cloud context awaiting login."""
        self._config = AppConfig(
            current_context_name="local",
            contexts=[
                Context(
                    name="local",
                    type="local",
                    source=self.local_db_path,
                    description="Local SQLite vault",
                ),
                Context(
                    name="cloud",
                    type="remote",
                    source=DEFAULT_CLOUD_URL,
                    description="FocusFlow Cloud (run 'context login' first)",
                ),
            ],
        )
        self.save_config()
        return self._config

    # ------------------------------------------------------------------
    # Storage selection
    # ------------------------------------------------------------------

    def cloud_unavailable_reason(self, context: Context) -> str | None:
        """Why a remote context cannot reach the cloud, or None if it can."""
        if not context.user_id:
            return f"context '{context.name}' has no user identity"
        if not self.load_context_credentials(context.name):
            return f"context '{context.name}' has no credentials"
        return None

    def build_storage_strategy_context(self) -> StorageStrategyContext:
        context = self.get_current_context()
        if context.type == "local":
            return StorageStrategyContext(LocalStorageStrategy(db_path=context.source))

        reason = self.cloud_unavailable_reason(context)
        if reason is None:
            return StorageStrategyContext(RemoteStorageStrategy(context))

        get_logger().warning("cloud storage unavailable, using local vault: %s", reason)
        return StorageStrategyContext(
            LocalStorageStrategy(db_path=self.local_db_path),
            fallback_reason=reason,
        )

    # ------------------------------------------------------------------
    # Contexts
    # ------------------------------------------------------------------

    def list_contexts(self) -> list[Context]:
        return self.config.contexts

    def get_current_context(self) -> Context:
        """The active context.

        Raises:
            ValueError: If config names a context that does not exist
        """
        return self.config.get_current_context()

    def _context_or_current(self, name: str | None) -> Context:
        return self.config.get_context(name) if name else self.get_current_context()

    def use_context(self, name: str) -> Context:
        context = self.config.get_context(name)
        self.config.current_context_name = context.name
        self.save_config()
        self._invalidate_storage()
        return context

    def set_user_identity(self, user_id: str | None, context_name: str | None = None) -> Context:
        """Set or clear the cloud user a context stores snapshots under."""
        context = self._context_or_current(context_name)
        context.user_id = user_id
        self.save_config()
        self._invalidate_storage()
        return context

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    def _credentials_path(self, context_name: str) -> Path:
        return self.credentials_dir / f"{context_name}.json"

    def load_context_credentials(self, context_name: str) -> dict | None:
        """Stored ``{"token": ...}`` for a context; None if missing or unreadable."""
        path = self._credentials_path(context_name)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except JSONDecodeError:
            get_logger().warning("ignoring unreadable credentials file %s", path)
            return None

    def save_credentials(self, access_token: str, context_name: str | None = None) -> None:
        path = self._credentials_path(self._context_or_current(context_name).name)
        path.write_text(json.dumps({"token": access_token}, indent=2), encoding="utf-8")
        path.chmod(0o600)
        self._invalidate_storage()

    def clear_credentials(self, context_name: str | None = None) -> None:
        path = self._credentials_path(self._context_or_current(context_name).name)
        path.unlink(missing_ok=True)
        self._invalidate_storage()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Process-wide ConfigService with its config already loaded."""
    service = ConfigService()
    service.load_config()
    return service


def get_storage_strategy_context() -> StorageStrategyContext:
    return get_config_service().storage_strategy_context
