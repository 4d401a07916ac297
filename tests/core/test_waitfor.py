"""Tests for readiness strategies."""

import re
from ipaddress import IPv4Address

import pytest

from dockerfixture.core.waitfor import (
    ExitedWait,
    LogSource,
    MessageWait,
    NoWait,
    RunningWait,
    _PollingWait,
    container_ip,
)
from dockerfixture.services.exceptions import (
    ContainerNotFoundError,
    ReadinessError,
    ReadinessTimeoutError,
    UnexpectedExitError,
)


class TestContainerIp:
    """Test cases for address extraction."""

    def test_default_bridge_address(self, inspect_payload):
        assert container_ip(inspect_payload(ip="172.17.0.5")) == IPv4Address("172.17.0.5")

    def test_falls_back_to_named_network(self, inspect_payload):
        payload = inspect_payload(ip="", networks={
            "none": {"IPAddress": ""},
            "fixtures": {"IPAddress": "10.1.0.3"},
        })
        assert container_ip(payload) == IPv4Address("10.1.0.3")

    def test_no_address_is_unspecified(self, inspect_payload):
        assert container_ip(inspect_payload(ip="")) == IPv4Address("0.0.0.0")

    def test_missing_network_settings(self):
        assert container_ip({}) == IPv4Address("0.0.0.0")


class TestNoWait:
    """Test cases for NoWait."""

    @pytest.mark.asyncio
    async def test_returns_immediately(self, make_pending, docker_service):
        running = await NoWait().wait_for_ready(make_pending())

        assert running.ip == IPv4Address("0.0.0.0")
        docker_service.inspect_container.assert_not_called()
        docker_service.container_logs.assert_not_called()


class TestRunningWait:
    """Test cases for RunningWait."""

    @pytest.mark.asyncio
    async def test_ready_when_running(self, make_pending, docker_service, inspect_payload):
        docker_service.inspect_container.side_effect = [
            inspect_payload(status="created", running=False),
            inspect_payload(status="running", running=True, ip="172.17.0.9"),
        ]
        wait = RunningWait(check_interval=0, max_checks=5)

        running = await make_pending(wait=wait).start()

        assert running.ip == IPv4Address("172.17.0.9")
        assert docker_service.inspect_container.await_count == 2
        docker_service.inspect_container.assert_awaited_with("abc123def4567890")

    @pytest.mark.asyncio
    async def test_times_out_after_max_checks(self, make_pending, docker_service, inspect_payload):
        docker_service.inspect_container.return_value = inspect_payload(status="created", running=False)
        wait = RunningWait(check_interval=0, max_checks=3)

        with pytest.raises(ReadinessTimeoutError, match="after 3 checks"):
            await make_pending(wait=wait).start()

        assert docker_service.inspect_container.await_count == 3
        docker_service.remove_container.assert_not_called()

    @pytest.mark.asyncio
    async def test_fails_when_container_exits(self, make_pending, docker_service, inspect_payload):
        docker_service.inspect_container.return_value = inspect_payload(
            status="exited", running=False, exit_code=137
        )
        wait = RunningWait(check_interval=0, max_checks=5)

        with pytest.raises(ReadinessError, match="exit code 137"):
            await make_pending(wait=wait).start()

        assert docker_service.inspect_container.await_count == 1

    @pytest.mark.asyncio
    async def test_daemon_errors_propagate(self, make_pending, docker_service):
        docker_service.inspect_container.side_effect = ContainerNotFoundError("gone")

        with pytest.raises(ContainerNotFoundError):
            await make_pending(wait=RunningWait(check_interval=0)).start()

    def test_rejects_invalid_settings(self):
        with pytest.raises(ValueError):
            RunningWait(max_checks=0)
        with pytest.raises(ValueError):
            RunningWait(check_interval=-1)


class TestExitedWait:
    """Test cases for ExitedWait."""

    @pytest.mark.asyncio
    async def test_ready_when_exited(self, make_pending, docker_service, inspect_payload):
        docker_service.inspect_container.side_effect = [
            inspect_payload(status="running", running=True),
            inspect_payload(status="exited", running=False, exit_code=0, ip="172.17.0.4"),
        ]

        running = await make_pending(wait=ExitedWait(check_interval=0)).start()

        assert running.ip == IPv4Address("0.0.0.0")

    @pytest.mark.asyncio
    async def test_unexpected_exit_code(self, make_pending, docker_service, inspect_payload):
        docker_service.inspect_container.return_value = inspect_payload(
            status="exited", running=False, exit_code=2
        )
        wait = ExitedWait(check_interval=0, expected_exit_code=0)

        with pytest.raises(UnexpectedExitError) as exc_info:
            await make_pending(wait=wait).start()

        assert exc_info.value.exit_code == 2

    @pytest.mark.asyncio
    async def test_any_exit_code_accepted_by_default(self, make_pending, docker_service, inspect_payload):
        docker_service.inspect_container.return_value = inspect_payload(
            status="exited", running=False, exit_code=1
        )

        running = await make_pending(wait=ExitedWait(check_interval=0)).start()

        assert running.id == "abc123def4567890"

    @pytest.mark.asyncio
    async def test_times_out(self, make_pending, docker_service, inspect_payload):
        docker_service.inspect_container.return_value = inspect_payload()

        with pytest.raises(ReadinessTimeoutError, match="not exited"):
            await make_pending(wait=ExitedWait(check_interval=0, max_checks=2)).start()

    @pytest.mark.asyncio
    async def test_dead_container_fails_immediately(self, make_pending, docker_service, inspect_payload):
        docker_service.inspect_container.return_value = inspect_payload(status="dead", running=False)

        with pytest.raises(ReadinessError, match="dead"):
            await make_pending(wait=ExitedWait(check_interval=0, max_checks=5)).start()

        assert docker_service.inspect_container.await_count == 1


class TestPollingWait:
    """Test cases for the polling base class."""

    def test_subclass_must_define_readiness_check(self):
        class IncompleteWait(_PollingWait):
            async def wait_for_ready(self, container):
                await self._poll(container, "ready")
                return container.into_running()

        with pytest.raises(TypeError):
            IncompleteWait()


class TestMessageWait:
    """Test cases for MessageWait."""

    @pytest.mark.asyncio
    async def test_ready_when_line_matches(self, make_pending, docker_service, inspect_payload):
        docker_service.container_logs.side_effect = [
            "starting\n",
            "starting\ndatabase system is ready to accept connections\n",
        ]
        docker_service.inspect_container.return_value = inspect_payload(ip="172.17.0.3")
        wait = MessageWait("ready to accept connections", check_interval=0)

        running = await make_pending(wait=wait).start()

        assert running.ip == IPv4Address("172.17.0.3")
        assert docker_service.container_logs.await_count == 2
        docker_service.container_logs.assert_awaited_with(
            "abc123def4567890", stdout=True, stderr=False
        )

    @pytest.mark.asyncio
    async def test_reads_requested_source(self, make_pending, docker_service, inspect_payload):
        docker_service.container_logs.return_value = "listening on :8080"
        docker_service.inspect_container.return_value = inspect_payload()
        wait = MessageWait(r"listening on :\d+", source=LogSource.BOTH)

        await make_pending(wait=wait).start()

        docker_service.container_logs.assert_awaited_once_with(
            "abc123def4567890", stdout=True, stderr=True
        )

    @pytest.mark.asyncio
    async def test_accepts_compiled_pattern(self, make_pending, docker_service, inspect_payload):
        docker_service.container_logs.return_value = "Server STARTED"
        docker_service.inspect_container.return_value = inspect_payload()
        wait = MessageWait(re.compile("started", re.IGNORECASE), source=LogSource.STDERR)

        running = await make_pending(wait=wait).start()

        assert running.name == "fixture-db"

    @pytest.mark.asyncio
    async def test_times_out(self, make_pending, docker_service, inspect_payload):
        docker_service.container_logs.return_value = "still booting"
        docker_service.inspect_container.return_value = inspect_payload()
        wait = MessageWait("ready", timeout=0, check_interval=0)

        with pytest.raises(ReadinessTimeoutError, match="'ready'"):
            await make_pending(wait=wait).start()

    @pytest.mark.asyncio
    async def test_fails_when_container_exits(self, make_pending, docker_service, inspect_payload):
        docker_service.container_logs.return_value = "fatal: bad config"
        docker_service.inspect_container.return_value = inspect_payload(
            status="exited", running=False, exit_code=1
        )
        wait = MessageWait("ready", timeout=60, check_interval=0)

        with pytest.raises(ReadinessError, match="exited without logging"):
            await make_pending(wait=wait).start()

    def test_rejects_negative_durations(self):
        with pytest.raises(ValueError, match="timeout"):
            MessageWait("ready", timeout=-1)
        with pytest.raises(ValueError, match="check_interval"):
            MessageWait("ready", check_interval=-1)
