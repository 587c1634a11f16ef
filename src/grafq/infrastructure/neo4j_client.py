"""Neo4j query executor over the bolt protocol.

Wraps a single async driver.  Records are converted to plain dicts with
``Record.data()``; values the JSON model can't hold (temporal and spatial
types) are turned into their string form.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase
from neo4j.exceptions import DriverError, Neo4jError

from grafq.domain.results import QueryResults, query_results
from grafq.infrastructure.client import DbClientError, QueryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Neo4jConfig:
    db_uri: str
    user: str
    password: str
    database_name: str


class Neo4jClient:
    """Runs Cypher queries against one Neo4j database."""

    def __init__(self, driver: AsyncDriver, config: Neo4jConfig) -> None:
        self._driver = driver
        self._config = config

    @classmethod
    async def connect(cls, config: Neo4jConfig) -> Neo4jClient:
        """Create the driver and verify the server is reachable.

        Raises:
            DbClientError: If the driver can't be created or can't connect.
        """
        try:
            driver = AsyncGraphDatabase.driver(
                config.db_uri, auth=(config.user, config.password)
            )
        except (ValueError, DriverError) as exc:
            raise DbClientError("couldn't build neo4j driver") from exc

        try:
            await driver.verify_connectivity()
        except (DriverError, Neo4jError, OSError) as exc:
            await driver.close()
            raise DbClientError(f"couldn't connect to neo4j at {config.db_uri}") from exc

        logger.debug("Connected to Neo4j at %s (db=%s)", config.db_uri, config.database_name)
        return cls(driver, config)

    async def execute(self, query: str) -> QueryResults:
        try:
            records, _summary, _keys = await self._driver.execute_query(
                query, database_=self._config.database_name
            )
        except (DriverError, Neo4jError) as exc:
            raise QueryError("couldn't execute query") from exc
        return query_results([to_json_compatible(record.data()) for record in records])

    def connection_uri(self) -> str:
        return self._config.db_uri

    async def close(self) -> None:
        await self._driver.close()


def to_json_compatible(value: Any) -> Any:
    """Recursively convert *value* into JSON-compatible types."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, dict):
        return {str(k): to_json_compatible(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_compatible(v) for v in value]
    return str(value)
