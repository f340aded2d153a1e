"""Aggregation functions — turn clean match records into archetype stats.

All functions take MatchRecords (see cleaning.clean_match) and return
aggregated data. No I/O, no side effects.

Stats shape (keys match the published data files):
    {"archetypes": {name: {"archetype", "wins", "losses", "draws", "winRate",
                           "matchups": {opponent: {"wins", "losses", "draws",
                                                   "percentage"}}}}}

Counting is one increment per match, never per game. Rates are computed
only by finalize_stats(), after every match (and every partial) is in.
"""

from collections import Counter

from pipeline.cleaning import ArchetypeRegistry, normalize_player_name, resolve_archetype
from pipeline.constants import (
    SKIP_MISSING_COMPETITOR,
    SKIP_EMPTY_NAME,
    SKIP_UNKNOWN_ARCHETYPE,
    SKIP_UNPARSEABLE_RESULT,
    SKIP_UNRESOLVED_WINNER,
)
from pipeline.results import DrawByScore, Unparseable, WinByName, parse_result

COUNT_KEYS = ("wins", "losses", "draws")


def new_archetype_stats(archetype):
    return {
        "archetype": archetype,
        "wins": 0,
        "losses": 0,
        "draws": 0,
        "winRate": 0.0,
        "matchups": {},
    }


def new_matchup_stats():
    return {"wins": 0, "losses": 0, "draws": 0, "percentage": 0.0}


def winning_side(winner_name, key1, key2):
    """Index (0 or 1) of the side the winner name refers to.

    None when the name matches neither side, or both (identical keys).
    """
    winner_key = normalize_player_name(winner_name)
    hits = [i for i, key in enumerate((key1, key2)) if key == winner_key]
    return hits[0] if len(hits) == 1 else None


def _two_player_keys(record, skip):
    """Canonical keys for both sides, or None (after logging) if unusable."""
    competitors = record.get("competitors") or []
    if len(competitors) < 2:
        skip(SKIP_MISSING_COMPETITOR)
        return None
    key1 = normalize_player_name(competitors[0].get("name"))
    key2 = normalize_player_name(competitors[1].get("name"))
    if not key1 or not key2:
        skip(SKIP_EMPTY_NAME)
        return None
    return key1, key2


# ─── Archetype Stats ────────────────────────────────────────────

def aggregate_archetype_stats(records, player_archetypes, registry=None, skip_log=None):
    """Accumulate raw win/loss/draw counts per archetype and per matchup.

    Matches that cannot be attributed are skipped, never raised; when
    skip_log is a list, one reason string is appended per skipped match.
    The returned counts are not finalized (rates are all 0.0).
    """
    if registry is None:
        registry = ArchetypeRegistry()

    def skip(reason):
        if skip_log is not None:
            skip_log.append(reason)

    stats = {"archetypes": {}}
    archetypes = stats["archetypes"]

    for record in records:
        keys = _two_player_keys(record, skip)
        if keys is None:
            continue
        key1, key2 = keys

        arch1 = resolve_archetype(key1, player_archetypes)
        arch2 = resolve_archetype(key2, player_archetypes)
        if arch1 is None or arch2 is None:
            skip(SKIP_UNKNOWN_ARCHETYPE)
            continue

        outcome = parse_result(record.get("result"))
        if isinstance(outcome, Unparseable):
            skip(SKIP_UNPARSEABLE_RESULT)
            continue

        a1 = registry.register(arch1)
        a2 = registry.register(arch2)
        if a1 not in archetypes:
            archetypes[a1] = new_archetype_stats(a1)
        if a2 not in archetypes:
            archetypes[a2] = new_archetype_stats(a2)
        s1, s2 = archetypes[a1], archetypes[a2]

        # Each side's entry is kept from its own perspective
        m12 = s1["matchups"].setdefault(a2, new_matchup_stats())
        m21 = s2["matchups"].setdefault(a1, new_matchup_stats())

        if isinstance(outcome, WinByName):
            side = winning_side(outcome.winner_name, key1, key2)
            if side is None:
                skip(SKIP_UNRESOLVED_WINNER)
                continue
            if side == 0:
                s1["wins"] += 1
                s2["losses"] += 1
                m12["wins"] += 1
                m21["losses"] += 1
            else:
                s2["wins"] += 1
                s1["losses"] += 1
                m21["wins"] += 1
                m12["losses"] += 1
        elif isinstance(outcome, DrawByScore):
            s1["draws"] += 1
            s2["draws"] += 1
            m12["draws"] += 1
            m21["draws"] += 1

    return stats


def merge_stats(partials):
    """Additively combine raw stats from independent batches.

    Order does not matter. Finalize the merged result, not the partials.
    """
    merged = {"archetypes": {}}
    archetypes = merged["archetypes"]

    for partial in partials:
        for name, data in partial["archetypes"].items():
            if name not in archetypes:
                archetypes[name] = new_archetype_stats(name)
            target = archetypes[name]
            for key in COUNT_KEYS:
                target[key] += data[key]
            for opponent, mu in data["matchups"].items():
                entry = target["matchups"].setdefault(opponent, new_matchup_stats())
                for key in COUNT_KEYS:
                    entry[key] += mu[key]

    return merged


# ─── Finalization ───────────────────────────────────────────────

def win_percentage(wins, losses):
    """wins / (wins + losses) * 100; draws excluded, 0 when undecided."""
    total = wins + losses
    return wins / total * 100 if total > 0 else 0.0


def finalize_stats(stats):
    """Return a new stats object with winRate and matchup percentages set.

    Rates are derived purely from counts, so finalizing twice is a no-op.
    """
    finalized = {"archetypes": {}}
    for name, data in stats["archetypes"].items():
        out = {
            "archetype": data["archetype"],
            "wins": data["wins"],
            "losses": data["losses"],
            "draws": data["draws"],
            "winRate": win_percentage(data["wins"], data["losses"]),
            "matchups": {},
        }
        for opponent, mu in data["matchups"].items():
            out["matchups"][opponent] = {
                "wins": mu["wins"],
                "losses": mu["losses"],
                "draws": mu["draws"],
                "percentage": win_percentage(mu["wins"], mu["losses"]),
            }
        finalized["archetypes"][name] = out
    return finalized


def aggregate(records, player_archetypes, registry=None, skip_log=None):
    """Aggregate a full batch of matches and finalize the result."""
    raw = aggregate_archetype_stats(records, player_archetypes, registry=registry, skip_log=skip_log)
    return finalize_stats(raw)


# ─── Output Builders ────────────────────────────────────────────

def build_archetype_summary(stats, player_decks=None, registry=None):
    """Flat per-archetype list, most-played first.

    players/meta_share come from player_decks (registered players per
    archetype); labels are mapped through the registry when one is given.
    """
    player_counts = Counter()
    for label in (player_decks or {}).values():
        if not label:
            continue
        player_counts[registry.lookup(label) if registry else label] += 1
    total_players = sum(player_counts.values())

    summary = []
    for name, data in stats["archetypes"].items():
        players = player_counts.get(name, 0)
        summary.append({
            "archetype": name,
            "players": players,
            "meta_share": round(players / total_players * 100, 2) if total_players > 0 else 0,
            "matches": data["wins"] + data["losses"] + data["draws"],
            "wins": data["wins"],
            "losses": data["losses"],
            "draws": data["draws"],
            "winRate": round(data["winRate"], 2),
        })
    summary.sort(key=lambda x: (-x["matches"], x["archetype"]))
    return summary


def rank_archetypes(stats, min_matches=0):
    """Finalized archetypes with at least min_matches decided matches, best win rate first."""
    eligible = [
        a for a in stats["archetypes"].values()
        if a["wins"] + a["losses"] >= min_matches
    ]
    eligible.sort(key=lambda a: (-a["winRate"], -(a["wins"] + a["losses"]), a["archetype"]))
    return eligible


def build_matchup_matrix(stats):
    """Flatten matchups into archetype × opponent rows, skipping empty pairs."""
    all_archetypes = sorted(stats["archetypes"])
    rows = []
    for a1 in all_archetypes:
        matchups = stats["archetypes"][a1]["matchups"]
        for a2 in all_archetypes:
            data = matchups.get(a2)
            if data is None:
                continue
            total = data["wins"] + data["losses"] + data["draws"]
            if total == 0:
                continue
            rows.append({
                "archetype": a1,
                "opponent": a2,
                "wins": data["wins"],
                "losses": data["losses"],
                "draws": data["draws"],
                "total": total,
                "percentage": round(data["percentage"], 2),
            })
    return {"archetypes": all_archetypes, "matchups": rows}


# ─── Player Results ─────────────────────────────────────────────

def _new_player_result(name):
    return {
        "playerName": name,
        "wins": 0,
        "losses": 0,
        "draws": 0,
        "matchWins": 0,
        "matchLosses": 0,
        "matchDraws": 0,
    }


def _add_games(result, won, lost, drawn):
    result["wins"] += won
    result["losses"] += lost
    result["draws"] += drawn


def aggregate_player_results(records, skip_log=None):
    """Per-player match record plus game tallies from the result scores.

    Keyed by canonical player key. Unlike archetype stats this needs no
    deck data, so every attributable match counts.
    """
    def skip(reason):
        if skip_log is not None:
            skip_log.append(reason)

    results = {}
    for record in records:
        keys = _two_player_keys(record, skip)
        if keys is None:
            continue
        key1, key2 = keys

        outcome = parse_result(record.get("result"))
        if isinstance(outcome, Unparseable):
            skip(SKIP_UNPARSEABLE_RESULT)
            continue

        competitors = record["competitors"]
        for key, c in ((key1, competitors[0]), (key2, competitors[1])):
            if key not in results:
                results[key] = _new_player_result(c["name"].strip())
        p1, p2 = results[key1], results[key2]

        if isinstance(outcome, WinByName):
            side = winning_side(outcome.winner_name, key1, key2)
            if side is None:
                skip(SKIP_UNRESOLVED_WINNER)
                continue
            winner, loser = (p1, p2) if side == 0 else (p2, p1)
            _add_games(winner, outcome.side1_wins, outcome.side2_wins, outcome.draws)
            _add_games(loser, outcome.side2_wins, outcome.side1_wins, outcome.draws)
            winner["matchWins"] += 1
            loser["matchLosses"] += 1
        elif isinstance(outcome, DrawByScore):
            _add_games(p1, outcome.side1_wins, outcome.side2_wins, outcome.draws)
            _add_games(p2, outcome.side2_wins, outcome.side1_wins, outcome.draws)
            p1["matchDraws"] += 1
            p2["matchDraws"] += 1

    return results
