"""GraphQL schema factory for the EcoTaste backend.

Query and Mutation merge the resolver classes of every bounded context
into flat root fields (``menu``, ``stats``, ``logMeal``...).

Usage:
    from ecotaste.graphql_api.schema import create_schema
    schema = create_schema()
"""

import strawberry
from strawberry.tools import merge_types

from ecotaste.graphql_api.resolvers.insights import InsightsMutations, InsightsQueries
from ecotaste.graphql_api.resolvers.menu import MenuMutations, MenuQueries
from ecotaste.graphql_api.resolvers.tracking import TrackingMutations, TrackingQueries

Query = merge_types("Query", (MenuQueries, TrackingQueries, InsightsQueries))
Mutation = merge_types("Mutation", (TrackingMutations, InsightsMutations, MenuMutations))


def create_schema() -> strawberry.Schema:
    """Create the Strawberry schema with all resolvers."""
    return strawberry.Schema(query=Query, mutation=Mutation)
