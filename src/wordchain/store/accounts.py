"""Account rows: ``accounts(id TEXT PRIMARY KEY, salt TEXT, password TEXT)``."""

from __future__ import annotations

import logging

from wordchain.auth.session import Account
from wordchain.store.database import Database
from wordchain.store.errors import IntegrityError

logger = logging.getLogger("wordchain.store")


class AccountStore:
    """Reads and writes accounts; satisfies ``AccountLookup``."""

    __slots__ = ("_db",)

    def __init__(self, db: Database) -> None:
        self._db = db

    @property
    def db(self) -> Database:
        return self._db

    async def create_table(self) -> None:
        await self._db.execute(
            "CREATE TABLE IF NOT EXISTS accounts ("
            "id TEXT PRIMARY KEY, "
            "salt TEXT NOT NULL, "
            "password TEXT NOT NULL)"
        )

    async def drop_table(self) -> None:
        await self._db.execute("DROP TABLE IF EXISTS accounts")

    async def lookup(self, account_id: str) -> Account | None:
        row = await self._db.fetch_one(
            "SELECT id, salt, password FROM accounts WHERE id = ?", account_id
        )
        if row is None:
            return None
        return Account(id=row["id"], salt=row["salt"], password_hash=row["password"])

    async def insert(self, account: Account) -> bool:
        """Insert *account*; ``False`` when the id is already taken."""
        try:
            await self._db.execute(
                "INSERT INTO accounts (id, salt, password) VALUES (?, ?, ?)",
                account.id,
                account.salt,
                account.password_hash,
            )
        except IntegrityError:
            logger.debug("account %r already exists", account.id)
            return False
        return True

    async def delete(self, account_id: str) -> int:
        """Delete the account; returns rows removed (0 when already gone)."""
        return await self._db.execute("DELETE FROM accounts WHERE id = ?", account_id)
