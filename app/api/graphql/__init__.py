"""
GraphQL API.

- types: strawberry object and input types
- queries: read operations grouped by area
- mutations: sync, odds and user-content writes, auth
- schema: merged schema and the FastAPI router mounted at /graphql
"""
