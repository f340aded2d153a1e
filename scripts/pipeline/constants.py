"""Pipeline constants — paths, tournament config, thresholds, skip reasons."""

import os
from pathlib import Path

# ─── Paths ──────────────────────────────────────────────────────

SCRIPT_DIR = Path(__file__).resolve().parent.parent  # scripts/
PROJECT_DIR = SCRIPT_DIR.parent
DATA_DIR = PROJECT_DIR / "data"

# ─── Tournament ─────────────────────────────────────────────────

TOURNAMENT_ID = os.environ.get("TOURNAMENT_ID", "394299")

# Day 1 Standard rounds
DEFAULT_ROUNDS = [4, 5, 6, 7, 8]

# Data file suffixes: tournament-<id>-<suffix>.json
MATCHES_FILE = "matches"
PLAYER_DECKS_FILE = "player-decks"
DECKLISTS_FILE = "decklists"
STATS_FILE = "stats"
MATCHUPS_FILE = "matchups"
PLAYER_RESULTS_FILE = "player-results"


def data_filename(tournament_id, suffix):
    """'394299', 'stats' → 'tournament-394299-stats.json'."""
    return f"tournament-{tournament_id}-{suffix}.json"


# ─── Thresholds & Configuration ─────────────────────────────────

# Minimum decided matches for an archetype to appear in the summary
SUMMARY_MIN_MATCHES = 10
SUMMARY_TOP_N = 5

# ─── Skip Reasons ───────────────────────────────────────────────

SKIP_MISSING_COMPETITOR = "missing_competitor"
SKIP_EMPTY_NAME = "empty_name"
SKIP_UNKNOWN_ARCHETYPE = "unknown_archetype"
SKIP_UNPARSEABLE_RESULT = "unparseable_result"
SKIP_UNRESOLVED_WINNER = "unresolved_winner"
