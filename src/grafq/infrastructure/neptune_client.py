"""AWS Neptune query executor over HTTPS.

Uses boto3's ``neptunedata`` client, which signs requests with the
ambient AWS credentials (environment variables, shared config, or an
instance role).  boto3 is synchronous, so calls run on a private worker
thread; an abandoned call keeps that thread busy until it returns.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from grafq.domain.results import QueryResults, query_results
from grafq.infrastructure.client import DbClientError, QueryError

logger = logging.getLogger(__name__)


class NeptuneClient:
    """Runs openCypher queries against one Neptune cluster endpoint."""

    def __init__(self, client: Any, db_uri: str) -> None:
        self._client = client
        self._db_uri = db_uri
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="grafq-neptune")

    @classmethod
    def connect(cls, db_uri: str, session: boto3.Session | None = None) -> NeptuneClient:
        """Resolve AWS credentials and build the ``neptunedata`` client.

        Raises:
            DbClientError: If credentials can't be resolved or the client
                can't be created (e.g. no region configured).
        """
        session = session or boto3.Session()
        try:
            credentials = session.get_credentials()
        except BotoCoreError as exc:
            raise DbClientError("couldn't fetch AWS credentials") from exc
        if credentials is None:
            raise DbClientError("couldn't fetch AWS credentials: no credentials found")

        try:
            client = session.client("neptunedata", endpoint_url=db_uri)
        except BotoCoreError as exc:
            raise DbClientError("couldn't build neptune client") from exc

        logger.debug("Built Neptune client for %s", db_uri)
        return cls(client, db_uri)

    async def execute(self, query: str) -> QueryResults:
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(self._pool, self._run, query)
        except (BotoCoreError, ClientError) as exc:
            raise QueryError("couldn't execute query") from exc
        return query_results(_extract_rows(response))

    def _run(self, query: str) -> dict[str, Any]:
        return self._client.execute_open_cypher_query(openCypherQuery=query)

    def connection_uri(self) -> str:
        return self._db_uri

    async def close(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)
        self._client.close()


def _extract_rows(response: dict[str, Any]) -> list[dict[str, Any]]:
    """Pull the record list out of an openCypher response.

    Raises:
        QueryError: If the response has no list of records, or a record
            is not an object.
    """
    results = response.get("results")
    if not isinstance(results, list):
        raise QueryError("unexpected response from neptune: missing results")
    for index, row in enumerate(results):
        if not isinstance(row, dict):
            raise QueryError(
                f"unexpected response from neptune: record {index} is not an object"
            )
    return results
