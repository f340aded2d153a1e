"""Pipeline orchestration — build_and_write_all and main entry point."""

import sys
from collections import Counter
from pathlib import Path

from pipeline.constants import (
    DATA_DIR, TOURNAMENT_ID, DEFAULT_ROUNDS, data_filename,
    PLAYER_DECKS_FILE, DECKLISTS_FILE, STATS_FILE, MATCHUPS_FILE, PLAYER_RESULTS_FILE,
    SUMMARY_MIN_MATCHES, SUMMARY_TOP_N,
)
from pipeline.cleaning import (
    ArchetypeRegistry,
    clean_rounds,
    extract_player_decks,
    extract_player_names,
    build_decklists,
)
from pipeline.filtering import parse_rounds, filter_rounds, missing_rounds
from pipeline.aggregation import (
    aggregate,
    aggregate_player_results,
    build_archetype_summary,
    build_matchup_matrix,
    rank_archetypes,
)
from pipeline.io_helpers import load_matches, matches_path, write_json


def print_skip_counts(skip_log, indent="    "):
    skip_counts = Counter(skip_log)
    for reason, count in sorted(skip_counts.items(), key=lambda x: -x[1]):
        print(f"{indent}{reason}: {count}")


def build_and_write_all(matches_by_round, tournament_id=TOURNAMENT_ID, data_dir=DATA_DIR,
                        fold_archetype_labels=False):
    """Clean matches, aggregate, and write every derived JSON file.

    Returns the finalized tournament stats.
    """
    def out_name(suffix):
        return data_filename(tournament_id, suffix)

    records = clean_rounds(matches_by_round)
    print(f"  {len(records)} match records")

    # ── player maps ──
    player_decks = extract_player_decks(records)
    player_names = extract_player_names(records)
    print(f"  Mapped {len(player_decks)} players to decks")
    write_json(out_name(PLAYER_DECKS_FILE), player_decks, data_dir=data_dir)
    write_json(out_name(DECKLISTS_FILE), build_decklists(player_decks, player_names), data_dir=data_dir)

    # ── archetype stats ──
    registry = ArchetypeRegistry(fold_labels=fold_archetype_labels)
    skip_log = []
    stats = aggregate(records, player_decks, registry=registry, skip_log=skip_log)
    counted = len(records) - len(skip_log)
    print(f"  Aggregated {counted} matches into {len(stats['archetypes'])} archetypes, skipped {len(skip_log)}")
    if skip_log:
        print_skip_counts(skip_log)

    for labels in registry.near_duplicates():
        action = "folded" if fold_archetype_labels else "counted separately"
        print(f"  Warning: archetype labels differ only by case/spacing ({action}): {labels}")

    write_json(out_name(STATS_FILE), stats, data_dir=data_dir)

    # ── matchup matrix ──
    matrix = build_matchup_matrix(stats)
    matrix["summary"] = build_archetype_summary(stats, player_decks, registry=registry)
    write_json(out_name(MATCHUPS_FILE), matrix, data_dir=data_dir)

    # ── player results ──
    player_results = aggregate_player_results(records)
    results_list = sorted(
        player_results.values(),
        key=lambda p: (-p["matchWins"], p["matchLosses"], p["playerName"]),
    )
    write_json(out_name(PLAYER_RESULTS_FILE), results_list, data_dir=data_dir)

    return stats


def print_stats_summary(stats, min_matches=SUMMARY_MIN_MATCHES, top_n=SUMMARY_TOP_N):
    """Print the top archetypes by win rate among well-sampled ones."""
    print("\n=== Tournament Statistics Summary ===")
    print(f"\nTop Archetypes ({min_matches}+ matches):")
    for arch in rank_archetypes(stats, min_matches)[:top_n]:
        print(f"  {arch['archetype']}: {arch['wins']}-{arch['losses']}-{arch['draws']} "
              f"({arch['winRate']:.1f}% win rate)")
    print(f"\nTotal archetypes: {len(stats['archetypes'])}")


def main(argv=None):
    import argparse
    parser = argparse.ArgumentParser(description="Tournament Archetype Stats Pipeline")
    parser.add_argument("--rounds", default=f"{DEFAULT_ROUNDS[0]}-{DEFAULT_ROUNDS[-1]}",
                        help="Rounds to aggregate (e.g. '4-8', '4,5,6', '4-8,12-16')")
    parser.add_argument("--tournament-id", default=TOURNAMENT_ID,
                        help="Tournament id used in data file names")
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR,
                        help="Directory holding the match file and outputs")
    parser.add_argument("--fold-archetype-labels", action="store_true",
                        help="Merge archetype labels that differ only by case/spacing")
    args = parser.parse_args(argv)

    try:
        rounds = parse_rounds(args.rounds)
    except ValueError as e:
        parser.error(f"invalid --rounds: {e}")

    print("Tournament Archetype Stats Pipeline")
    print("=" * 50)

    print("\n[1/3] Loading matches...")
    path = matches_path(args.tournament_id, args.data_dir)
    if not path.exists():
        print(f"Error: match file not found: {path}")
        sys.exit(1)
    matches_by_round = load_matches(path)

    print(f"\n[2/3] Selecting rounds {rounds}...")
    selected = filter_rounds(matches_by_round, rounds)
    missing = missing_rounds(selected, rounds)
    print(f"  Using {len(selected)} rounds")
    if missing:
        print(f"  Warning: no data for rounds {missing}")

    print("\n[3/3] Aggregating and writing data files...")
    stats = build_and_write_all(
        selected,
        tournament_id=args.tournament_id,
        data_dir=args.data_dir,
        fold_archetype_labels=args.fold_archetype_labels,
    )

    if stats["archetypes"]:
        print_stats_summary(stats)

    print(f"\nDone! Data saved to {args.data_dir}")


if __name__ == "__main__":
    main()
