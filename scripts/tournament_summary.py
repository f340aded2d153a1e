"""Generate a text summary of a tournament's archetype stats."""

import sys
from pathlib import Path

from pipeline.aggregation import rank_archetypes
from pipeline.constants import (
    DATA_DIR, TOURNAMENT_ID, STATS_FILE, SUMMARY_MIN_MATCHES, SUMMARY_TOP_N, data_filename,
)
from pipeline.io_helpers import load_json


def build_summary(stats, min_matches=SUMMARY_MIN_MATCHES, top_n=SUMMARY_TOP_N):
    """Build a summary dict from finalized tournament stats."""
    archetypes = stats.get("archetypes", {}) if stats else {}
    if not archetypes:
        return {"total_archetypes": 0, "total_matches": 0}

    # Each match is counted once per side
    side_results = sum(a["wins"] + a["losses"] + a["draws"] for a in archetypes.values())

    top = []
    for arch in rank_archetypes(stats, min_matches)[:top_n]:
        top.append({
            "name": arch["archetype"],
            "record": f"{arch['wins']}-{arch['losses']}-{arch['draws']}",
            "winrate": round(arch["winRate"], 1),
        })

    most_played = max(archetypes.values(), key=lambda a: (a["wins"] + a["losses"] + a["draws"], a["archetype"]))

    return {
        "total_archetypes": len(archetypes),
        "total_matches": side_results // 2,
        "min_matches": min_matches,
        "top_archetypes": top,
        "most_played": most_played["archetype"],
    }


def format_summary(summary):
    """Format the summary as plain text."""
    if summary["total_archetypes"] == 0:
        return "**Tournament Summary**\nNo attributable matches."

    lines = [
        "**Tournament Summary**",
        "",
        f"**{summary['total_matches']}** matches across **{summary['total_archetypes']}** archetypes",
        f"Most played: **{summary['most_played']}**",
    ]

    if summary.get("top_archetypes"):
        lines.append("")
        lines.append(f"**Top Archetypes** ({summary['min_matches']}+ matches)")
        for i, arch in enumerate(summary["top_archetypes"], 1):
            lines.append(f"{i}. {arch['name']} — {arch['record']} ({arch['winrate']}% WR)")

    return "\n".join(lines)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    tournament_id = argv[0] if argv else TOURNAMENT_ID
    data_dir = Path(argv[1]) if len(argv) > 1 else DATA_DIR

    stats = load_json(data_dir / data_filename(tournament_id, STATS_FILE))
    if stats is None:
        print(f"No stats file for tournament {tournament_id} in {data_dir}; run the pipeline first")
        sys.exit(1)

    message = format_summary(build_summary(stats))

    # Write to file for the workflow to read
    output_path = data_dir / "tournament_summary.txt"
    output_path.write_text(message, encoding="utf-8")
    print(message)


if __name__ == "__main__":
    main()
