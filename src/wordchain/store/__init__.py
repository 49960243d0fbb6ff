"""Account persistence over SQLite or PostgreSQL.

Usage::

    from wordchain.store import AccountStore, Database

    store = AccountStore(Database("sqlite:///accounts.db"))
    await store.create_table()
    account = await store.lookup("alice")
"""

from wordchain.store.accounts import AccountStore
from wordchain.store.database import Database
from wordchain.store.errors import DataError, DriverNotInstalledError, IntegrityError, QueryError

__all__ = [
    "AccountStore",
    "DataError",
    "Database",
    "DriverNotInstalledError",
    "IntegrityError",
    "QueryError",
]
