"""Root of the route tree."""

from __future__ import annotations

from wordchain.auth.session import SessionAuthenticator
from wordchain.routes.account import AccountInfoRoute, AccountRoute
from wordchain.routes.login import LoginRoute
from wordchain.routes.session import SessionRoute
from wordchain.routing.node import RouteNode
from wordchain.store.accounts import AccountStore


class RootRoute(RouteNode):
    """``/`` itself answers 404; it only owns the top-level routes."""

    name = ""


def build_tree(
    store: AccountStore,
    authenticator: SessionAuthenticator,
    *,
    drop_on_down: bool = True,
) -> RootRoute:
    """Assemble the service's route tree around *store* and *authenticator*."""
    return RootRoute(
        [
            AccountRoute(
                store,
                [AccountInfoRoute(store, authenticator)],
                drop_on_down=drop_on_down,
            ),
            LoginRoute(store, authenticator),
            SessionRoute(authenticator),
        ]
    )
