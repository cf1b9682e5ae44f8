"""Table fetcher abstraction: point-in-time snapshots of key-value store tables.

Provides a pluggable fetcher. Default is Redis, one logical database per
plane (CONFIG_DB, APPL_DB, STATE_DB). A table with no rows is an empty
mapping, never an error. Store or transport failures raise StoreUnavailable.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

import redis.asyncio as redis
from redis.exceptions import RedisError, ResponseError

from netview.config import settings
from netview.core.errors import StoreUnavailable

logger = logging.getLogger("netview.store")

# row key -> field -> value
TableSnapshot = Mapping[str, Mapping[str, str]]

# Separator between the table name and the row key, per logical database.
DB_SEPARATORS: dict[str, str] = {
    "APPL_DB": ":",
    "CONFIG_DB": "|",
    "STATE_DB": "|",
}


class TableFetcher(ABC):
    """Abstract source of table snapshots."""

    @abstractmethod
    async def fetch(self, db: str, table: str) -> dict[str, dict[str, str]]:
        """Return every row of `table` in `db`. Raises StoreUnavailable on failure."""
        ...

    async def close(self) -> None:
        """Release any connections. No-op by default."""


class RedisTableFetcher(TableFetcher):
    """Reads tables from Redis with SCAN + pipelined HGETALL.

    Keys look like `<TABLE><sep><row key>`; the row key keeps any inner
    separators (e.g. `PortChannel102|Ethernet0`).
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        password: str | None = None,
        db_numbers: Mapping[str, int] | None = None,
        socket_timeout: float | None = None,
        clients: Mapping[str, "redis.Redis"] | None = None,
    ):
        self._host = host or settings.redis_host
        self._port = port or settings.redis_port
        self._password = password if password is not None else settings.redis_password
        self._db_numbers = dict(db_numbers or settings.db_numbers)
        self._socket_timeout = socket_timeout or settings.redis_socket_timeout
        self._clients: dict[str, redis.Redis] = dict(clients or {})

    def _client(self, db: str) -> "redis.Redis":
        client = self._clients.get(db)
        if client is None:
            if db not in self._db_numbers:
                raise StoreUnavailable(db, "*", "unknown database")
            client = redis.Redis(
                host=self._host,
                port=self._port,
                db=self._db_numbers[db],
                password=self._password,
                socket_timeout=self._socket_timeout,
                decode_responses=True,
            )
            self._clients[db] = client
        return client

    async def fetch(self, db: str, table: str) -> dict[str, dict[str, str]]:
        separator = DB_SEPARATORS.get(db, "|")
        prefix = f"{table}{separator}"
        client = self._client(db)
        try:
            keys = [key async for key in client.scan_iter(match=f"{prefix}*")]
            if not keys:
                return {}
            async with client.pipeline(transaction=False) as pipe:
                for key in keys:
                    pipe.hgetall(key)
                rows = await pipe.execute(raise_on_error=False)
        except RedisError as exc:
            logger.warning("Fetch failed db=%s table=%s error=%s", db, table, exc)
            raise StoreUnavailable(db, table, str(exc)) from exc

        # A row deleted between SCAN and HGETALL comes back empty, and a key
        # that is not a hash comes back as a WRONGTYPE error; skip both.
        return {
            key[len(prefix):]: dict(fields)
            for key, fields in zip(keys, rows)
            if fields and not isinstance(fields, ResponseError)
        }

    async def close(self) -> None:
        for client in self._clients.values():
            await client.aclose()
        self._clients.clear()


class InMemoryTableFetcher(TableFetcher):
    """In-memory tables for testing. Failures can be injected per table."""

    def __init__(self):
        self._tables: dict[tuple[str, str], dict[str, dict[str, str]]] = {}
        self._failures: dict[tuple[str, str], str] = {}
        self.calls: list[tuple[str, str]] = []

    def load(self, db: str, table: str, rows: Mapping[str, Mapping[str, str]]) -> None:
        """Add rows to a table, replacing rows with the same key."""
        target = self._tables.setdefault((db, table), {})
        for key, fields in rows.items():
            target[key] = dict(fields)

    def flush(self, db: str | None = None) -> None:
        """Drop every table, or only the tables of one database."""
        if db is None:
            self._tables.clear()
            return
        for key in [k for k in self._tables if k[0] == db]:
            del self._tables[key]

    def fail(self, db: str, table: str, reason: str = "injected failure") -> None:
        self._failures[(db, table)] = reason

    async def fetch(self, db: str, table: str) -> dict[str, dict[str, str]]:
        self.calls.append((db, table))
        if (db, table) in self._failures:
            raise StoreUnavailable(db, table, self._failures[(db, table)])
        rows = self._tables.get((db, table), {})
        return {key: dict(fields) for key, fields in rows.items()}


async def fetch_snapshots(
    fetcher: TableFetcher,
    queries: Iterable[tuple[str, str]],
    *,
    concurrently: bool = False,
) -> dict[tuple[str, str], TableSnapshot]:
    """Fetch every (db, table) once. Fails fast: the first error aborts the rest.

    All fetches complete before this returns, so a caller never derives
    from a partial set.
    """
    queries = list(dict.fromkeys(queries))
    if not concurrently:
        return {(db, table): await fetcher.fetch(db, table) for db, table in queries}

    tasks = [asyncio.ensure_future(fetcher.fetch(db, table)) for db, table in queries]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return dict(zip(queries, results))


# Module-level singleton — can be replaced for testing
_fetcher: TableFetcher | None = None


def get_fetcher() -> TableFetcher:
    """Get the current table fetcher."""
    global _fetcher
    if _fetcher is None:
        _fetcher = RedisTableFetcher()
    return _fetcher


def set_fetcher(fetcher: TableFetcher | None) -> None:
    """Set the table fetcher (used for testing)."""
    global _fetcher
    _fetcher = fetcher
