"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from focusflow_cli.models.config_models import AppConfig, Context
from focusflow_cli.models.errors import GatewayError
from focusflow_cli.models.planner import Snapshot
from focusflow_cli.repositories import PersistenceGateway
from focusflow_cli.services.workspace_service import WorkspaceService


class InMemoryGateway(PersistenceGateway):
    """Gateway keeping the last saved snapshot in memory."""

    def __init__(self, snapshot: Snapshot | None = None, fail_saves: bool = False):
        self.stored = snapshot
        self.fail_saves = fail_saves
        self.save_count = 0

    @property
    def storage_type(self) -> str:
        return "memory"

    async def load(self) -> Snapshot | None:
        if self.stored is None:
            return None
        return Snapshot.model_validate(self.stored.to_dict())

    async def save(self, snapshot: Snapshot) -> None:
        if self.fail_saves:
            raise GatewayError("disk on fire")
        self.save_count += 1
        self.stored = Snapshot.model_validate(snapshot.to_dict())


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_logger(tmp_path):
    """Keep the application log inside tmp_path."""
    import logging

    import focusflow_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("focusflow_cli").handlers.clear()
    with patch("focusflow_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    logger_mod._logger = None
    logging.getLogger("focusflow_cli").handlers.clear()


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


def _make_local_config(tmp_path) -> AppConfig:
    """Build a minimal AppConfig pointing at a tmp SQLite database."""
    db = str(tmp_path / "test.db")
    ctx = Context(name="local", type="local", source=db)
    return AppConfig(current_context_name="local", contexts=[ctx])


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory."""
    from focusflow_cli.services.config_service import ConfigService, get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("focusflow_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("focusflow_cli.services.config_service.user_data_dir", return_value=tmpdir):
            yield ConfigService()
    get_config_service.cache_clear()


@pytest.fixture()
def mock_config_service(tmp_path):
    """Provide a MagicMock that stands in for get_config_service()."""
    config = _make_local_config(tmp_path)

    svc = MagicMock()
    svc.load_config.return_value = config
    svc.config = config
    svc.get_current_context.return_value = config.contexts[0]
    svc.load_context_credentials.return_value = None
    return svc


# ---------------------------------------------------------------------------
# Workspace helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture()
def workspace(gateway) -> WorkspaceService:
    """A workspace with default state and an in-memory gateway."""
    ws = WorkspaceService(gateway, sink=MagicMock())
    ws.restore(Snapshot())
    return ws


@pytest.fixture()
def patch_workspace(workspace, mock_config_service):
    """Make every command open the same in-memory workspace."""
    with patch(
        "focusflow_cli.commands.utils.open_workspace",
        AsyncMock(return_value=workspace),
    ):
        with patch(
            "focusflow_cli.commands.utils.get_config_service",
            return_value=mock_config_service,
        ):
            yield workspace


@pytest.fixture()
def make_gateway():
    """Factory for in-memory gateways, optionally pre-loaded with a snapshot."""
    return InMemoryGateway
