"""
Domain package for Hero Queries.

Exports the row models and table handles used by the query layer.
"""

from hero_queries.domain.models import Hero, Race

__all__ = [
    "Hero",
    "Race",
]
