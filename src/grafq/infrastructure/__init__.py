"""Infrastructure layer — database clients for the supported backends.

This layer depends on stdlib and third-party drivers (neo4j, boto3).
It must never import from services, commands, console, or output.
"""
