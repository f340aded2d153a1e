"""Shared test factories for pipeline tests.

Provides factory functions for building raw provider matches and clean
match records with sensible defaults and easy overrides.
"""

import json
import sys
from pathlib import Path

# Add scripts/ to path so we can import pipeline
SCRIPTS_DIR = Path(__file__).resolve().parent.parent
if str(SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_DIR))

DATA_DIR = SCRIPTS_DIR.parent / "data"

# Default players and their decks
PLAYER_DECKS = {"alice": "Red", "bob": "Blue"}


# ─── Raw Provider Match Factory ───────────────────────────────────

def make_raw_competitor(name, deck="", player_id=1, decklist_on_player=False):
    """One competitor in the provider's match payload."""
    player = {"ID": player_id, "DisplayName": name, "ScreenName": name.lower()}
    decklists = [{"DecklistId": f"deck-{player_id}", "DecklistName": deck}] if deck else []
    competitor = {"Team": {"Players": [player]}}
    if decklist_on_player:
        player["Decklists"] = decklists
    else:
        competitor["Decklists"] = decklists
    return competitor


def make_raw_match(**overrides):
    """Build a valid raw provider match. Override any field via kwargs.

    The default is Alice (Red) beating Bob (Blue) 2-0-0 at table 1.
    """
    match = {
        "TableNumber": 1,
        "ResultString": "Alice won 2-0-0",
        "Competitors": [
            make_raw_competitor("Alice", "Red", player_id=101),
            make_raw_competitor("Bob", "Blue", player_id=102),
        ],
    }
    match.update(overrides)
    return match


# ─── Clean Match Record Factory ───────────────────────────────────

def make_record(name1="Alice", name2="Bob", result="Alice won 2-0-0", round_number=1,
                deck1="", deck2="", table=1):
    """Build a clean MatchRecord (output of clean_match())."""
    return {
        "round": round_number,
        "table": table,
        "result": result,
        "competitors": [
            {"name": name1, "player_id": None, "deck": deck1},
            {"name": name2, "player_id": None, "deck": deck2},
        ],
    }


def make_records(n, name1="Alice", name2="Bob", p1_wins=None, draws=0, round_number=1):
    """Generate N records between the same two players.

    Args:
        n: Number of matches
        name1 / name2: Display names for side 1 and side 2
        p1_wins: Number of matches side 1 wins (default: n//2)
        draws: Number of drawn matches, taken from the end of the batch
        round_number: Round for all records
    """
    if p1_wins is None:
        p1_wins = (n - draws) // 2

    records = []
    for i in range(n):
        if i >= n - draws:
            result = "1-1-1 Draw"
        elif i < p1_wins:
            result = f"{name1} won 2-1-0"
        else:
            result = f"{name2} won 2-0-0"
        records.append(make_record(name1, name2, result, round_number=round_number, table=i + 1))
    return records


# ─── Real JSON Loader ────────────────────────────────────────────

def load_real_json(filename):
    """Load a real JSON file from data/. Returns None if not found."""
    path = DATA_DIR / filename
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
