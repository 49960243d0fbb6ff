"""Wordchain application class.

An ``App`` wraps a validated route tree and speaks ASGI 3.0: HTTP scopes
go through the request pipeline, the lifespan scope drives the tree's
``up``/``down`` hooks and the database connection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wordchain._internal.asgi import Receive, Scope, Send
from wordchain.config import AppConfig
from wordchain.http.response import ResponseOptions
from wordchain.routing.dispatch import bootstrap, shutdown, validate_tree
from wordchain.routing.node import RouteNode
from wordchain.server.handler import HandlerSettings, handle_request

if TYPE_CHECKING:
    from wordchain.store.database import Database

logger = logging.getLogger("wordchain.server")


class App:
    """The wordchain ASGI application.

    The route tree is validated at construction and never changes
    afterwards. Lifecycle:

    * startup: connect the database (if any), then ``bootstrap`` the tree.
      A failing ``up`` hook aborts startup.
    * shutdown: ``down`` hooks first (at most once, even when the server
      already ran them on a signal), then disconnect the database.
    """

    __slots__ = ("_db", "_down_done", "_root", "_settings", "config")

    def __init__(
        self,
        root: RouteNode,
        config: AppConfig | None = None,
        *,
        db: Database | None = None,
    ) -> None:
        validate_tree(root)
        self.config = config or AppConfig()
        self._root = root
        self._db = db
        self._down_done = False
        self._settings = HandlerSettings(
            max_content_length=self.config.max_content_length,
            options=ResponseOptions(allow_cors=self.config.allow_cors),
            debug=self.config.debug,
        )

    @property
    def root(self) -> RouteNode:
        return self._root

    @property
    def db(self) -> Database | None:
        return self._db

    # -- Lifecycle --

    async def startup(self) -> None:
        """Connect the database and run every ``up`` hook in pre-order.

        Raises:
            LifecycleError: an ``up`` hook failed.
        """
        if self._db is not None:
            await self._db.connect()
        try:
            await bootstrap(self._root)
        except Exception:
            if self._db is not None:
                await self._db.disconnect()
            raise
        self._down_done = False
        logger.info("route tree is up")

    async def run_down_hooks(self) -> None:
        """Run every ``down`` hook once; later calls are no-ops."""
        if self._down_done:
            return
        self._down_done = True
        failure = await shutdown(self._root)
        if failure is None:
            logger.info("route tree is down")

    async def shutdown(self) -> None:
        """Run the ``down`` hooks (if not already run) and disconnect."""
        await self.run_down_hooks()
        if self._db is not None:
            await self._db.disconnect()

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, root=self._root, settings=self._settings)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    await self.shutdown()
                except Exception as exc:
                    logger.exception("shutdown failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with uvicorn until interrupted."""
        from wordchain.server.run import serve

        serve(self, host=host, port=port)
