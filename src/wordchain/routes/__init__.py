"""The service's route tree.

::

    /                     RootRoute         (404)
    /account              AccountRoute      POST: create
    /account/<id>         AccountInfoRoute  GET: view, DELETE: remove
    /login                LoginRoute        POST: Basic auth -> session cookies
    /session              SessionRoute      GET: who am I (rotates cookies)
"""

from wordchain.routes.account import AccountInfoRoute, AccountRoute
from wordchain.routes.login import LoginRoute
from wordchain.routes.root import RootRoute, build_tree
from wordchain.routes.session import SessionRoute

__all__ = [
    "AccountInfoRoute",
    "AccountRoute",
    "LoginRoute",
    "RootRoute",
    "SessionRoute",
    "build_tree",
]
