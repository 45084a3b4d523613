"""Insights GraphQL resolvers."""

from ecotaste.graphql_api.resolvers.insights.mutations import InsightsMutations
from ecotaste.graphql_api.resolvers.insights.queries import InsightsQueries

__all__ = [
    "InsightsMutations",
    "InsightsQueries",
]
