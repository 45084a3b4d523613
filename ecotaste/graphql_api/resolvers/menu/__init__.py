"""Menu GraphQL resolvers."""

from ecotaste.graphql_api.resolvers.menu.mutations import MenuMutations
from ecotaste.graphql_api.resolvers.menu.queries import MenuQueries

__all__ = [
    "MenuMutations",
    "MenuQueries",
]
