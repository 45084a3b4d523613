"""GraphQL API (Strawberry) exposing the EcoTaste use cases."""
