"""I/O operations — loading match files and writing JSON outputs."""

import json

from pipeline.constants import DATA_DIR, MATCHES_FILE, TOURNAMENT_ID, data_filename


# ─── Match Data ─────────────────────────────────────────────────

def matches_path(tournament_id=TOURNAMENT_ID, data_dir=DATA_DIR):
    return data_dir / data_filename(tournament_id, MATCHES_FILE)


def load_matches(path):
    """Load raw provider matches as {round: [matches]}.

    Returns {} when the file is missing, unreadable, or not a round mapping.
    """
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        print(f"  Warning: could not read {path.name}: {e}")
        return {}

    if not isinstance(data, dict):
        print(f"  Warning: {path.name} is not a round → matches mapping, ignoring")
        return {}

    total = sum(len(m) for m in data.values() if isinstance(m, list))
    print(f"  Loaded {total} matches across {len(data)} rounds from {path.name}")
    return data


# ─── JSON Writers ────────────────────────────────────────────────

def write_json(filename, data, data_dir=DATA_DIR, compact=False):
    """Write data to a JSON file in the data directory."""
    path = data_dir / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if compact:
            json.dump(data, f, separators=(",", ":"), ensure_ascii=False)
        else:
            json.dump(data, f, indent=2, ensure_ascii=False)
    size_kb = path.stat().st_size / 1024
    print(f"  Wrote {path.name} ({size_kb:.0f} KB)")
    return path


def load_json(path):
    """Read a JSON file. Returns None if it doesn't exist."""
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
