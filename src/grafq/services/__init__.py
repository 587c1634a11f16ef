"""Service layer — writing, paging, and benchmarking query results.

Services may import from domain and infrastructure layers.
They must never import from commands or console.
"""
