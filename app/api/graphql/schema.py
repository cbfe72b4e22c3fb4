"""
GraphQL schema and its FastAPI router.

Query and Mutation are merged from the per-area classes in ``queries`` and
``mutations``. Field names are camelCased by strawberry.
"""
import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.tools import merge_types

from app.api.graphql.context import get_context
from app.api.graphql.extensions import OperationNameLogging
from app.api.graphql.mutations import (
    AlertMutation, AuthMutation, FavoriteMutation, NoteMutation, ScreenMutation,
    SelectionMutation, SyncMutation,
)
from app.api.graphql.queries import (
    FixtureQuery, MatchDetailsQuery, OddsQuery, ReferenceQuery, SystemQuery, UserContentQuery,
)

Query = merge_types(
    "Query",
    (ReferenceQuery, FixtureQuery, OddsQuery, MatchDetailsQuery, UserContentQuery, SystemQuery),
)

Mutation = merge_types(
    "Mutation",
    (SyncMutation, NoteMutation, FavoriteMutation, ScreenMutation, SelectionMutation, AlertMutation, AuthMutation),
)

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[OperationNameLogging],
)


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(schema, context_getter=get_context, graphql_ide="graphiql")
