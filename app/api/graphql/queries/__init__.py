from app.api.graphql.queries.fixtures import FixtureQuery
from app.api.graphql.queries.match_details import MatchDetailsQuery
from app.api.graphql.queries.odds import OddsQuery
from app.api.graphql.queries.reference import ReferenceQuery
from app.api.graphql.queries.system import SystemQuery
from app.api.graphql.queries.user_content import UserContentQuery

__all__ = [
    "FixtureQuery",
    "MatchDetailsQuery",
    "OddsQuery",
    "ReferenceQuery",
    "SystemQuery",
    "UserContentQuery",
]
