"""grafq: query Neo4j and AWS Neptune databases from an interactive console."""

__version__ = "0.1.0"
