"""Meal tracking GraphQL resolvers."""

from ecotaste.graphql_api.resolvers.tracking.mutations import TrackingMutations
from ecotaste.graphql_api.resolvers.tracking.queries import TrackingQueries

__all__ = [
    "TrackingMutations",
    "TrackingQueries",
]
