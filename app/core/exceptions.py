"""
Application exception hierarchy.

Upstream failures are caught at the sync/odds mutation boundary and turned
into ``{success: false, message}`` results. Validation and authentication
errors propagate and surface in the GraphQL ``errors`` list with their
message as-is.
"""
from typing import Optional


class FootballInsightsError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamAPIError(FootballInsightsError):
    """An upstream provider returned an error status or error envelope."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.provider} error ({self.status_code}): {self.message}"
        return f"{self.provider} error: {self.message}"


class UnmappedLeagueError(UpstreamAPIError):
    """No odds-provider sport key is configured for a league."""

    def __init__(self, league_id: int):
        super().__init__("odds-api", f"No sport key mapping for league ID {league_id}")
        self.league_id = league_id

    def __str__(self) -> str:
        return self.message


class ValidationError(FootballInsightsError):
    pass


class AuthenticationError(FootballInsightsError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class NotFoundError(FootballInsightsError):
    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
