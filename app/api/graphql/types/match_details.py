"""
GraphQL types for per-match detail fetched live from API-Football.

Nothing here is persisted. Each type has a ``from_api`` constructor that
reads the raw upstream item.
"""
from typing import Dict, List, Optional

import strawberry


@strawberry.type
class LineupPlayer:
    id: int
    name: str
    number: Optional[int]
    pos: str


@strawberry.type
class Coach:
    id: Optional[int]
    name: Optional[str]
    photo: Optional[str]


def _lineup_players(entries: List[Dict], default_pos: str) -> List[LineupPlayer]:
    players = []
    for entry in entries or []:
        player = entry.get("player", {})
        players.append(LineupPlayer(
            id=player.get("id"),
            name=player.get("name"),
            number=player.get("number"),
            pos=player.get("pos") or default_pos,
        ))
    return players


@strawberry.type
class TeamLineup:
    team_id: int
    team_name: str
    team_logo: Optional[str]
    formation: str
    start_xi: List[LineupPlayer] = strawberry.field(name="startXI")
    substitutes: List[LineupPlayer]
    coach: Optional[Coach]

    @classmethod
    def from_api(cls, item: Dict) -> "TeamLineup":
        team = item.get("team", {})
        coach = item.get("coach")
        return cls(
            team_id=team.get("id"),
            team_name=team.get("name"),
            team_logo=team.get("logo"),
            formation=item.get("formation") or "4-4-2",
            start_xi=_lineup_players(item.get("startXI"), "Unknown"),
            substitutes=_lineup_players(item.get("substitutes"), "Sub"),
            coach=Coach(id=coach.get("id"), name=coach.get("name"), photo=coach.get("photo")) if coach else None,
        )


@strawberry.type
class MatchEvent:
    time: Optional[int]
    extra_time: Optional[int]
    team_id: int
    team_name: str
    player_name: Optional[str]
    assist_name: Optional[str]
    type: str
    detail: str
    comments: Optional[str]

    @classmethod
    def from_api(cls, item: Dict) -> "MatchEvent":
        time = item.get("time", {})
        team = item.get("team", {})
        assist = item.get("assist") or {}
        return cls(
            time=time.get("elapsed"),
            extra_time=time.get("extra"),
            team_id=team.get("id"),
            team_name=team.get("name"),
            player_name=(item.get("player") or {}).get("name"),
            assist_name=assist.get("name") or None,
            type=item.get("type"),
            detail=item.get("detail"),
            comments=item.get("comments"),
        )


@strawberry.type
class H2HMatch:
    fixture_id: int
    date: str
    venue: Optional[str]
    home_team_id: int
    home_team_name: str
    home_team_logo: Optional[str]
    away_team_id: int
    away_team_name: str
    away_team_logo: Optional[str]
    home_goals: Optional[int]
    away_goals: Optional[int]
    home_winner: Optional[bool]
    league_name: str
    league_logo: Optional[str]

    @classmethod
    def from_api(cls, item: Dict) -> "H2HMatch":
        fixture = item.get("fixture", {})
        home = item["teams"]["home"]
        away = item["teams"]["away"]
        goals = item.get("goals", {})
        league = item.get("league", {})
        return cls(
            fixture_id=fixture.get("id"),
            date=fixture.get("date"),
            venue=(fixture.get("venue") or {}).get("name") or None,
            home_team_id=home.get("id"),
            home_team_name=home.get("name"),
            home_team_logo=home.get("logo"),
            away_team_id=away.get("id"),
            away_team_name=away.get("name"),
            away_team_logo=away.get("logo"),
            home_goals=goals.get("home"),
            away_goals=goals.get("away"),
            home_winner=home.get("winner"),
            league_name=league.get("name"),
            league_logo=league.get("logo"),
        )


@strawberry.type
class H2HSummary:
    total_matches: int = 0
    team1_wins: int = 0
    team2_wins: int = 0
    draws: int = 0
    team1_goals: int = 0
    team2_goals: int = 0


@strawberry.type
class H2HResult:
    summary: H2HSummary
    matches: List[H2HMatch]

    @classmethod
    def empty(cls) -> "H2HResult":
        return cls(summary=H2HSummary(), matches=[])

    @classmethod
    def from_api(cls, items: List[Dict], team1_id: int) -> "H2HResult":
        """
        Summarize meetings from team1's point of view.

        Winners come from the upstream winner flags; a match with neither
        flag set counts as a draw. Missing goals count as zero.
        """
        summary = H2HSummary(total_matches=len(items))

        for item in items:
            home = item["teams"]["home"]
            away = item["teams"]["away"]
            home_goals = item.get("goals", {}).get("home") or 0
            away_goals = item.get("goals", {}).get("away") or 0

            if home.get("id") == team1_id:
                team1, team2 = home, away
                summary.team1_goals += home_goals
                summary.team2_goals += away_goals
            else:
                team1, team2 = away, home
                summary.team1_goals += away_goals
                summary.team2_goals += home_goals

            if team1.get("winner") is True:
                summary.team1_wins += 1
            elif team2.get("winner") is True:
                summary.team2_wins += 1
            else:
                summary.draws += 1

        return cls(summary=summary, matches=[H2HMatch.from_api(item) for item in items])


def _stat(stats: Dict, group: str, key: str):
    # Zero and empty values read as null
    return (stats.get(group) or {}).get(key) or None


def _rating(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@strawberry.type
class PlayerMatchStats:
    player_id: int
    player_name: str
    player_photo: Optional[str]
    position: Optional[str]
    rating: Optional[float]
    minutes: Optional[int]
    goals: Optional[int]
    assists: Optional[int]
    shots: Optional[int]
    shots_on_target: Optional[int]
    passes: Optional[int]
    key_passes: Optional[int]
    pass_accuracy: Optional[str]
    tackles: Optional[int]
    interceptions: Optional[int]
    duels_won: Optional[int]
    duels_total: Optional[int]
    dribbles_success: Optional[int]
    dribbles_attempts: Optional[int]
    fouls_drawn: Optional[int]
    fouls_committed: Optional[int]
    yellow_cards: Optional[int]
    red_cards: Optional[int]

    @classmethod
    def from_api(cls, item: Dict) -> "PlayerMatchStats":
        player = item.get("player", {})
        statistics = item.get("statistics") or [{}]
        stats = statistics[0] or {}
        accuracy = _stat(stats, "passes", "accuracy")
        return cls(
            player_id=player.get("id"),
            player_name=player.get("name"),
            player_photo=player.get("photo"),
            position=_stat(stats, "games", "position"),
            rating=_rating(_stat(stats, "games", "rating")),
            minutes=_stat(stats, "games", "minutes"),
            goals=_stat(stats, "goals", "total"),
            assists=_stat(stats, "goals", "assists"),
            shots=_stat(stats, "shots", "total"),
            shots_on_target=_stat(stats, "shots", "on"),
            passes=_stat(stats, "passes", "total"),
            key_passes=_stat(stats, "passes", "key"),
            pass_accuracy=str(accuracy) if accuracy is not None else None,
            tackles=_stat(stats, "tackles", "total"),
            interceptions=_stat(stats, "tackles", "interceptions"),
            duels_won=_stat(stats, "duels", "won"),
            duels_total=_stat(stats, "duels", "total"),
            dribbles_success=_stat(stats, "dribbles", "success"),
            dribbles_attempts=_stat(stats, "dribbles", "attempts"),
            fouls_drawn=_stat(stats, "fouls", "drawn"),
            fouls_committed=_stat(stats, "fouls", "committed"),
            yellow_cards=_stat(stats, "cards", "yellow"),
            red_cards=_stat(stats, "cards", "red"),
        )


@strawberry.type
class TeamPlayerStats:
    team_id: int
    team_name: str
    team_logo: Optional[str]
    players: List[PlayerMatchStats]

    @classmethod
    def from_api(cls, item: Dict) -> "TeamPlayerStats":
        team = item.get("team", {})
        return cls(
            team_id=team.get("id"),
            team_name=team.get("name"),
            team_logo=team.get("logo"),
            players=[PlayerMatchStats.from_api(p) for p in item.get("players", [])],
        )
