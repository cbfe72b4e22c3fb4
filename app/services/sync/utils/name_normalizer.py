"""Team name normalization for matching fixtures against odds events.

API-Football and The Odds API name clubs independently ("Manchester United"
vs "Manchester United FC"). Both the odds sync and the live fixture-odds
lookup compare names through normalize_team_name so they agree on every pair.
"""
import re

# Club-type tokens dropped before comparison. Matched anywhere in the
# lower-cased name, not only as whole words: "Racing Club" loses its "ac".
CLUB_TOKENS_RE = re.compile(r"fc|cf|afc|sc|ac")
WHITESPACE_RE = re.compile(r"\s+")


def normalize_team_name(name: str) -> str:
    """
    Reduce a team name to its comparable form.

    Steps:
    1. Lower-case
    2. Remove club tokens (fc, cf, afc, sc, ac)
    3. Collapse whitespace runs to one space
    4. Trim

    Examples:
        >>> normalize_team_name("Manchester United FC")
        'manchester united'
        >>> normalize_team_name("AFC Bournemouth")
        'bournemouth'
        >>> normalize_team_name("Racing Club")
        'ring club'
    """
    if not name:
        return ""

    name = CLUB_TOKENS_RE.sub("", name.lower())
    return WHITESPACE_RE.sub(" ", name).strip()


def names_overlap(a: str, b: str) -> bool:
    """True when one normalized name contains the other."""
    a_norm = normalize_team_name(a)
    b_norm = normalize_team_name(b)
    return a_norm in b_norm or b_norm in a_norm
