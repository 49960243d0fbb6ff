"""Wire the word-chain service: database, account store, sessions, routes."""

from __future__ import annotations

import time
from collections.abc import Callable

from wordchain.app import App
from wordchain.auth.session import SessionAuthenticator, SessionConfig
from wordchain.config import AppConfig
from wordchain.routes.root import build_tree
from wordchain.store.accounts import AccountStore
from wordchain.store.database import Database


def create_app(
    config: AppConfig | None = None,
    *,
    clock: Callable[[], float] = time.time,
    drop_on_down: bool = True,
) -> App:
    """Build the service ``App`` from *config* (default: ``AppConfig.from_env()``).

    Raises:
        ConfigurationError: the config cannot be served (e.g. no secret).
    """
    config = config or AppConfig.from_env()
    config.validate()

    db = Database(config.database_url, echo=config.debug)
    store = AccountStore(db)
    authenticator = SessionAuthenticator(
        SessionConfig.from_app_config(config), store, clock=clock
    )
    root = build_tree(store, authenticator, drop_on_down=drop_on_down)
    return App(root, config, db=db)
