"""Tests for the uvicorn server wrapper's shutdown ordering."""

import asyncio
import signal

from wordchain.app import App
from wordchain.config import AppConfig
from wordchain.routing import RouteNode
from wordchain.server.run import WordchainServer, build_server


class SlowDown(RouteNode):
    name = "slow"

    def __init__(self, delay: float, log: list[str]) -> None:
        super().__init__()
        self.delay = delay
        self.log = log

    async def down(self) -> None:
        await asyncio.sleep(self.delay)
        self.log.append("down")


def _app(delay: float = 0.0, log: list[str] | None = None, **config) -> App:
    return App(RouteNode([SlowDown(delay, log if log is not None else [])]), AppConfig(**config))


class TestBuildServer:
    def test_uses_app_config(self) -> None:
        server = build_server(
            _app(host="0.0.0.0", port=8123, shutdown_grace_timeout=5.0, shutdown_hook_timeout=2.0)
        )
        assert isinstance(server, WordchainServer)
        assert server.config.host == "0.0.0.0"
        assert server.config.port == 8123
        assert server.config.timeout_graceful_shutdown == 5.0
        assert server.hook_timeout == 2.0

    def test_arguments_override_config(self) -> None:
        server = build_server(_app(), host="localhost", port=9000)
        assert server.config.host == "localhost"
        assert server.config.port == 9000


class TestStop:
    async def test_down_hooks_run_before_exit(self) -> None:
        log: list[str] = []
        server = build_server(_app(log=log))
        assert not server.should_exit
        await server._stop()
        assert log == ["down"]
        assert server.should_exit

    async def test_slow_hooks_are_bounded(self) -> None:
        log: list[str] = []
        server = build_server(_app(delay=5.0, log=log, shutdown_hook_timeout=0.01))
        await server._stop()
        assert log == []
        assert server.should_exit

    async def test_signal_schedules_stop_once(self) -> None:
        log: list[str] = []
        server = build_server(_app(log=log))
        server._loop = asyncio.get_running_loop()
        server.handle_exit(signal.SIGTERM, None)
        await asyncio.sleep(0.05)
        assert log == ["down"]
        assert server.should_exit
        assert server._stopping is not None

    def test_signal_before_serving_defers_to_uvicorn(self) -> None:
        server = build_server(_app())
        server.handle_exit(signal.SIGINT, None)
        assert server.should_exit
