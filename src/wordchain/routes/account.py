"""Account creation, lookup, and deletion."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import anyio

from wordchain.auth.session import Account, SessionAuthenticator
from wordchain.errors import BadRequest, NotFound
from wordchain.http.request import Request
from wordchain.http.response import Response, json_response
from wordchain.routing.node import WILDCARD, RouteNode
from wordchain.security.audit import emit_security_event
from wordchain.security.passwords import hash_password, new_salt
from wordchain.store.accounts import AccountStore

logger = logging.getLogger("wordchain.routes")


class AccountRoute(RouteNode):
    """``/account``: owns the ``accounts`` table and creates accounts.

    ``up`` creates the table; ``down`` drops it unless *drop_on_down*
    is false.
    """

    name = "account"

    def __init__(
        self,
        store: AccountStore,
        children: Iterable[RouteNode] = (),
        *,
        drop_on_down: bool = True,
    ) -> None:
        super().__init__(children)
        self._store = store
        self._drop_on_down = drop_on_down

    async def up(self) -> None:
        await self._store.create_table()

    async def down(self) -> None:
        if self._drop_on_down:
            await self._store.drop_table()

    async def post(self, request: Request, segment: str | None) -> Response:
        """Create an account from an urlencoded ``id`` and ``password``."""
        form = await request.form()
        account_id = form.get("id", "")
        password = form.get("password", "")
        if not account_id or not password:
            raise BadRequest("Both 'id' and 'password' are required")
        if "/" in account_id:
            raise BadRequest("'id' must not contain '/'")

        salt = new_salt()
        password_hash = await anyio.to_thread.run_sync(hash_password, password, salt)
        created = await self._store.insert(
            Account(id=account_id, salt=salt, password_hash=password_hash)
        )
        if not created:
            return Response("Account already exists", status=409)

        logger.info("account created: %s", account_id)
        emit_security_event("account.created", request=request, user_id=account_id)
        return Response(status=201).with_header("Location", f"/account/{account_id}")


class AccountInfoRoute(RouteNode):
    """``/account/<id>``: view or delete one account."""

    name = WILDCARD

    def __init__(self, store: AccountStore, authenticator: SessionAuthenticator) -> None:
        super().__init__()
        self._store = store
        self._auth = authenticator

    async def get(self, request: Request, segment: str | None) -> Response:
        account = await self._store.lookup(segment or "")
        if account is None:
            raise NotFound()
        return json_response({"id": account.id})

    async def delete(self, request: Request, segment: str | None) -> Response:
        """Delete the account after authenticating as its owner.

        A bearer ``Authorization`` header selects the legacy flow;
        otherwise the session cookies are validated. A row that is
        already gone still counts as deleted.
        """
        account_id = segment or ""

        if "authorization" in request.headers:
            rejection = self._auth.authorize(account_id, request)
            if rejection is not None:
                return rejection.to_response()
            await self._remove(account_id, request)
            return Response()

        check = await self._auth.validate(request)
        if not check.ok:
            return check.to_response()
        if check.subject != account_id:
            return check.apply(Response("forbidden", status=403))
        await self._remove(account_id, request)
        return check.apply(Response())

    async def _remove(self, account_id: str, request: Request) -> None:
        removed = await self._store.delete(account_id)
        if removed:
            logger.info("account deleted: %s", account_id)
        else:
            logger.info("account %s was already gone", account_id)
        emit_security_event("account.deleted", request=request, user_id=account_id)
