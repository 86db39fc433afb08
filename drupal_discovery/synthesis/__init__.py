"""SQL generation package."""

from .query_synthesizer import QuerySynthesizer, QuerySkeleton

__all__ = ['QuerySynthesizer', 'QuerySkeleton']
