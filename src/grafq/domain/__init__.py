"""Domain layer — result sets, output formats, pagers, benchmark runs.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
