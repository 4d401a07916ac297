import pytest
from click.testing import CliRunner
from unittest.mock import AsyncMock, MagicMock

from dockerfixture.core.waitfor import NoWait
from dockerfixture.models.container import PendingContainer, StartPolicy


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def mock_docker_client():
    """Provides a mocked docker-py client."""
    mock_client = MagicMock()
    mock_client.ping.return_value = True
    mock_client.api.containers.return_value = []
    return mock_client


@pytest.fixture
def docker_service():
    """Provides a mocked DockerService with awaitable daemon operations."""
    service = MagicMock()
    service.start_container = AsyncMock(return_value=None)
    service.inspect_container = AsyncMock(return_value={})
    service.container_logs = AsyncMock(return_value="")
    service.create_container = AsyncMock(return_value="abc123def4567890")
    service.remove_container = AsyncMock(return_value=None)
    service.list_containers = AsyncMock(return_value=[])
    return service


@pytest.fixture
def make_pending(docker_service):
    """Factory for pending containers bound to the mocked service."""
    def _make(wait=None, name="fixture-db", id="abc123def4567890", handle="db",
              start_policy=StartPolicy.RELAXED):
        return PendingContainer(
            name, id, handle, start_policy, wait or NoWait(), docker_service
        )
    return _make


@pytest.fixture
def inspect_payload():
    """Builds minimal daemon inspect payloads."""
    def _build(status="running", running=True, exit_code=0, ip="172.17.0.2", networks=None):
        return {
            'Id': 'abc123def4567890',
            'State': {'Status': status, 'Running': running, 'ExitCode': exit_code},
            'NetworkSettings': {'IPAddress': ip, 'Networks': networks or {}},
        }
    return _build
