"""GraphQL API: schema, types and resolvers."""
