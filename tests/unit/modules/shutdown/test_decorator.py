"""Tests for the shutdown_hook decorator and the coordinator factory."""

import asyncio
import pytest
from unittest.mock import AsyncMock, Mock

from src.modules.logging import BaseLogger
from src.modules.shutdown import (
    ManualTriggerSource,
    ShutdownConfig,
    ShutdownCoordinator,
    ShutdownCoordinatorFactory,
    ShutdownTimeoutError,
    shutdown_hook,
)


@pytest.fixture
def mock_logger():
    return Mock(spec=BaseLogger)

@pytest.fixture
def default_coordinator(mock_logger):
    """Install a fresh default coordinator driven by a manual trigger."""
    factory = ShutdownCoordinatorFactory.get_instance()
    factory.reset()
    coordinator = factory.create_coordinator(
        config=ShutdownConfig(logger=mock_logger),
        trigger_source=ManualTriggerSource()
    )
    yield coordinator
    factory.reset()


class TestFactory:
    """Test cases for ShutdownCoordinatorFactory."""

    def test_singleton(self):
        assert ShutdownCoordinatorFactory.get_instance() is ShutdownCoordinatorFactory.get_instance()

    def test_create_returns_existing(self, default_coordinator):
        factory = ShutdownCoordinatorFactory.get_instance()
        assert factory.create_coordinator() is default_coordinator
        assert factory.get_coordinator() is default_coordinator
        assert factory.get_coordinator("missing") is None

    def test_named_coordinators(self, default_coordinator, mock_logger):
        factory = ShutdownCoordinatorFactory.get_instance()
        other = factory.create_coordinator(
            "workers",
            config=ShutdownConfig(logger=mock_logger, parallel=True),
            trigger_source=ManualTriggerSource()
        )
        assert other is not default_coordinator
        assert other.parallel is True
        assert factory.get_coordinator("workers") is other

    def test_reset_detaches_triggers(self, mock_logger):
        factory = ShutdownCoordinatorFactory.get_instance()
        factory.reset()
        trigger = ManualTriggerSource()
        factory.create_coordinator("temp", config=ShutdownConfig(logger=mock_logger), trigger_source=trigger)

        factory.reset()

        assert not trigger.subscribed
        assert factory.get_coordinator("temp") is None


class TestShutdownHook:
    """Test cases for the shutdown_hook decorator."""

    def test_registers_instance(self, default_coordinator):
        class MyService:
            @shutdown_hook()
            async def stop(self):
                pass

        MyService()
        assert len(default_coordinator.services) == 1
        assert default_coordinator.services[0].name == "TestShutdownHook.test_registers_instance.<locals>.MyService.stop"

    def test_registers_every_instance(self, default_coordinator):
        class MyService:
            @shutdown_hook()
            async def stop(self):
                pass

        MyService()
        MyService()
        assert len(default_coordinator.services) == 2

    def test_decorated_method_still_callable(self, default_coordinator):
        class Counter:
            def __init__(self, start):
                self.value = start

            @shutdown_hook()
            def stop(self):
                self.value += 1
                return self.value

        counter = Counter(5)
        assert counter.stop() == 6
        assert len(default_coordinator.services) == 1

    def test_subclass_registers_once(self, default_coordinator):
        class Base:
            def __init__(self):
                self.ready = True

            @shutdown_hook()
            async def stop(self):
                pass

        class Child(Base):
            def __init__(self):
                super().__init__()

            @shutdown_hook()
            async def flush(self):
                pass

        Child()
        names = sorted(service.name.rsplit(".", 1)[-1] for service in default_coordinator.services)
        assert names == ["flush", "stop"]

    def test_slots_class_registers(self, default_coordinator):
        class Slotted:
            __slots__ = ("value",)

            def __init__(self, value):
                self.value = value

            @shutdown_hook()
            async def stop(self):
                pass

        Slotted(1)
        Slotted(2)
        assert len(default_coordinator.services) == 2

    @pytest.mark.asyncio
    async def test_calls_decorated_methods(self, default_coordinator):
        stop1 = AsyncMock()
        stop2 = AsyncMock()

        class MyService:
            @shutdown_hook()
            async def s1(self):
                await stop1()

            @shutdown_hook()
            async def s2(self):
                await stop2()

        MyService()
        await default_coordinator.shutdown()

        stop1.assert_awaited_once()
        stop2.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_explicit_coordinator(self, default_coordinator, mock_logger):
        other = ShutdownCoordinator(config=ShutdownConfig(logger=mock_logger), trigger_source=ManualTriggerSource())
        stop = AsyncMock()

        class MyService:
            @shutdown_hook(coordinator=other)
            async def stop(self):
                await stop()

        MyService()
        assert default_coordinator.services == ()

        await other.shutdown()
        stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_hook_timeout_is_logged(self, default_coordinator, mock_logger):
        finished = asyncio.Event()

        class SlowService:
            @shutdown_hook(timeout=0.05)
            async def stop(self):
                await asyncio.sleep(0.2)
                finished.set()

        SlowService()
        await default_coordinator.shutdown()

        message, error = mock_logger.log_error.call_args.args
        assert message == "Error closing service: Shutdown timed out after 0.05 seconds"
        assert isinstance(error, ShutdownTimeoutError)

        # The hook itself keeps running
        await asyncio.wait_for(finished.wait(), timeout=1)

    @pytest.mark.asyncio
    async def test_errors_are_logged(self, default_coordinator, mock_logger):
        class MyService:
            @shutdown_hook()
            async def stop(self):
                raise ValueError("Boom")

        MyService()
        await default_coordinator.shutdown()

        mock_logger.log_error.assert_called_once()
        assert mock_logger.log_error.call_args.args[0] == "Error closing service: Boom"

    @pytest.mark.asyncio
    async def test_instance_after_shutdown_not_registered(self, default_coordinator, mock_logger):
        class MyService:
            @shutdown_hook()
            async def stop(self):
                pass

        await default_coordinator.shutdown()
        MyService()

        assert default_coordinator.services == ()
        assert mock_logger.log_warning.call_args.args[0].startswith("Shutdown hook not registered")
