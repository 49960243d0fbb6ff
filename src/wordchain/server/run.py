"""Production server: uvicorn with wordchain's shutdown ordering.

On SIGINT/SIGTERM the route tree's ``down`` hooks run first, bounded by
``shutdown_hook_timeout``. Only then does uvicorn stop accepting
connections and drain in-flight requests, bounded by
``shutdown_grace_timeout``, before exiting. A second signal forces exit.
"""

from __future__ import annotations

import asyncio
import logging
from types import FrameType
from typing import TYPE_CHECKING

import uvicorn

if TYPE_CHECKING:
    from wordchain.app import App

logger = logging.getLogger("wordchain.server")


class WordchainServer(uvicorn.Server):
    """A ``uvicorn.Server`` that runs ``down`` hooks before draining."""

    def __init__(self, config: uvicorn.Config, app: App, *, hook_timeout: float) -> None:
        super().__init__(config)
        self.wordchain_app = app
        self.hook_timeout = hook_timeout
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stopping: asyncio.Task[None] | None = None

    async def serve(self, sockets: list | None = None) -> None:  # type: ignore[override]
        self._loop = asyncio.get_running_loop()
        await super().serve(sockets=sockets)

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        if self._stopping is not None or self._loop is None:
            # Second signal, or not yet serving: let uvicorn escalate.
            super().handle_exit(sig, frame)
            return
        logger.info("signal %d received, running down hooks", sig)
        self._loop.call_soon_threadsafe(self._begin_stop)

    def _begin_stop(self) -> None:
        if self._stopping is None:
            self._stopping = asyncio.ensure_future(self._stop())

    async def _stop(self) -> None:
        try:
            await asyncio.wait_for(self.wordchain_app.run_down_hooks(), self.hook_timeout)
        except TimeoutError:
            logger.warning("down hooks did not finish within %.1fs", self.hook_timeout)
        except Exception:
            logger.exception("down hooks failed")
        finally:
            self.should_exit = True


def build_server(app: App, host: str | None = None, port: int | None = None) -> WordchainServer:
    """Configure a ``WordchainServer`` from ``app.config``."""
    config = app.config
    uv_config = uvicorn.Config(
        app,
        host=host or config.host,
        port=port or config.port,
        lifespan="on",
        timeout_graceful_shutdown=config.shutdown_grace_timeout,
        # logging already set up by wordchain.logging
        log_config=None,
        log_level=config.log_level,
        server_header=False,
    )
    return WordchainServer(uv_config, app, hook_timeout=config.shutdown_hook_timeout)


def serve(app: App, host: str | None = None, port: int | None = None) -> None:
    """Run *app* until a termination signal completes the shutdown sequence."""
    server = build_server(app, host, port)
    server.run()
    if not server.started:
        # startup failed (an up hook raised); uvicorn already logged it
        raise SystemExit(3)
