"""GraphQL resolvers, one package per bounded context."""
