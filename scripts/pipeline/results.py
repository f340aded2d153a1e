"""Match result parsing — turn provider result strings into outcomes.

Result strings look like:
    "Guglielmo Lupi won 2-0-0"     winner name, winner games, loser games, draws
    "1-1-0 Draw"                   no winner, side 1 games, side 2 games, draws
    "Match was a draw 1-1-1"

Each matcher is tried in order; the first hit wins. Anything else is
Unparseable, which callers must handle explicitly.
"""

import re
from dataclasses import dataclass

WON_PATTERN = re.compile(r"^(.+?)\s+won\s+(\d+)-(\d+)-(\d+)$")
SCORE_PATTERN = re.compile(r"(\d+)-(\d+)-(\d+)")


@dataclass(frozen=True)
class WinByName:
    """A named player won. side1 = winner's games, side2 = loser's games."""
    winner_name: str
    side1_wins: int
    side2_wins: int
    draws: int


@dataclass(frozen=True)
class DrawByScore:
    """Overall draw. Counts are positional: side1, side2, drawn games."""
    side1_wins: int
    side2_wins: int
    draws: int
    winner_name = None


@dataclass(frozen=True)
class Unparseable:
    text: str = ""
    winner_name = None
    side1_wins = 0
    side2_wins = 0
    draws = 0


def _match_win(text):
    m = WON_PATTERN.match(text)
    if not m:
        return None
    return WinByName(m.group(1).strip(), int(m.group(2)), int(m.group(3)), int(m.group(4)))


def _match_score(text):
    m = SCORE_PATTERN.search(text)
    if not m:
        return None
    return DrawByScore(int(m.group(1)), int(m.group(2)), int(m.group(3)))


MATCHERS = (_match_win, _match_score)


def parse_result(text):
    """Parse a result string into WinByName, DrawByScore or Unparseable."""
    if not isinstance(text, str):
        return Unparseable()
    stripped = text.strip()
    for matcher in MATCHERS:
        outcome = matcher(stripped)
        if outcome is not None:
            return outcome
    return Unparseable(stripped)
