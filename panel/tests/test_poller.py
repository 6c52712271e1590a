"""Tests for the periodic status refresh."""

import asyncio
from unittest.mock import MagicMock

from panel.poller import Poller


def _run(coro):
    return asyncio.run(coro)


class TestPoller:

    def test_checks_immediately_then_periodically(self):
        checker = MagicMock()

        async def scenario():
            poller = Poller(checker, interval=0.01)
            poller.start()
            await asyncio.sleep(0.1)
            await poller.stop()

        _run(scenario())
        assert checker.check.call_count >= 2

    def test_stop_cancels_loop(self):
        checker = MagicMock()

        async def scenario():
            poller = Poller(checker, interval=60)
            poller.start()
            assert poller.running
            await asyncio.sleep(0.05)
            await poller.stop()
            assert not poller.running

        _run(scenario())
        assert checker.check.call_count == 1

    def test_start_is_idempotent(self):
        checker = MagicMock()

        async def scenario():
            poller = Poller(checker, interval=60)
            poller.start()
            task = poller._task
            poller.start()
            assert poller._task is task
            await poller.stop()

        _run(scenario())

    def test_stop_without_start(self):
        _run(Poller(MagicMock(), interval=1).stop())
