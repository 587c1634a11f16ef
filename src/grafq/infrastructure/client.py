"""Query executors and the factory that picks one from ``DB_URI``.

There are exactly two executors: :class:`Neo4jClient` (``bolt://``) and
:class:`NeptuneClient` (``http://`` / ``https://``).  The choice is made
once, before a command runs, and never changes afterwards.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from grafq.errors import GrafqError

if TYPE_CHECKING:
    from grafq.config.settings import DbSettings
    from grafq.domain.results import QueryResults
    from grafq.infrastructure.neo4j_client import Neo4jClient
    from grafq.infrastructure.neptune_client import NeptuneClient

logger = logging.getLogger(__name__)

NEO4J_ENV_VARS = ("NEO4J_USER", "NEO4J_PASSWORD", "NEO4J_DB")

_DB_URI_FOLLOW_UP = """\
grafq requires the environment variable DB_URI to be set.

- For an AWS Neptune database, use the https scheme. Neptune uses IAM
    authentication, so ensure your AWS credentials are configured correctly (via
    environment variables or the AWS shared config file):

    DB_URI="https://abc.xyz.us-east-1.neptune.amazonaws.com:8182"

- For a Neo4j database, use the bolt scheme and provide authentication details:

    DB_URI="bolt://127.0.0.1:7687"
    NEO4J_USER="neo4j"
    NEO4J_PASSWORD="your-password"
    NEO4J_DB="neo4j"
"""

_SCHEME_FOLLOW_UP = """\
Only 'bolt' and 'https' protocols are supported by grafq.
Use bolt for neo4j, and https for AWS Neptune."""

_URI_FORM_FOLLOW_UP = """\
The URI needs to be in the form <protocol>://<host>:<port>. For example:
- bolt://127.0.0.1:7687 (for neo4j)
- https://abc.xyz.us-east-1.neptune.amazonaws.com:8182 (for AWS Neptune)"""

_NEO4J_FOLLOW_UP = """\
The environment variables NEO4J_USER, NEO4J_PASSWORD, and NEO4J_DB need to be set when connecting
to a neo4j database (which was determined by the bolt protocol in DB_URI)."""


class QueryExecutor(Protocol):
    """What the console and the query command need from a database client."""

    async def execute(self, query: str) -> QueryResults:
        """Run *query* and return its rows.

        Raises:
            QueryError: If the backend rejects or fails the query.
        """
        ...

    def connection_uri(self) -> str:
        """The URI shown to the user as "connected to"."""
        ...


class QueryError(Exception):
    """A query failed for reasons intrinsic to the query or the connection."""


class DbClientError(GrafqError):
    """A database client couldn't be built."""


class DbUriNotSetError(DbClientError):
    def __init__(self) -> None:
        super().__init__("DB_URI is not set", follow_up=_DB_URI_FOLLOW_UP)


class UnsupportedSchemeError(DbClientError):
    def __init__(self, scheme: str) -> None:
        super().__init__(
            f'DB_URI has an unsupported protocol: "{scheme}"',
            follow_up=_SCHEME_FOLLOW_UP,
        )


class InvalidDbUriError(DbClientError):
    def __init__(self, uri: str) -> None:
        super().__init__(f'DB_URI is invalid: "{uri}"', follow_up=_URI_FORM_FOLLOW_UP)


class Neo4jConnectionInfoMissingError(DbClientError):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"missing neo4j connection info: {', '.join(missing)}",
            follow_up=_NEO4J_FOLLOW_UP,
        )


async def get_db_client(settings: DbSettings) -> Neo4jClient | NeptuneClient:
    """Build the executor that matches ``settings.db_uri``'s scheme.

    Raises:
        DbClientError: If the URI is missing or unsupported, or the client
            can't be built.
    """
    db_uri = settings.db_uri
    if not db_uri:
        raise DbUriNotSetError()

    scheme, sep, _rest = db_uri.partition("://")
    if not sep:
        raise InvalidDbUriError(db_uri)

    if scheme in ("http", "https"):
        from grafq.infrastructure.neptune_client import NeptuneClient

        logger.debug("Using Neptune client for %s", db_uri)
        return NeptuneClient.connect(db_uri)

    if scheme == "bolt":
        from grafq.infrastructure.neo4j_client import Neo4jClient, Neo4jConfig

        values: dict[str, Any] = {
            "user": settings.neo4j_user,
            "password": settings.neo4j_password,
            "database_name": settings.neo4j_db,
        }
        missing = [
            env_var
            for env_var, value in zip(NEO4J_ENV_VARS, values.values(), strict=True)
            if not value
        ]
        if missing:
            raise Neo4jConnectionInfoMissingError(missing)

        logger.debug("Using Neo4j client for %s", db_uri)
        return await Neo4jClient.connect(Neo4jConfig(db_uri=db_uri, **values))

    raise UnsupportedSchemeError(scheme)
