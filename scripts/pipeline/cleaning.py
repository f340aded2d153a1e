"""Parsing & cleaning — provider match records into clean MatchRecords.

Also owns player identity (name normalization) and archetype lookup, since
both are needed to connect a match to the decks its players registered.
"""

import re

WHITESPACE_RUN = re.compile(r"\s+")


# ─── Player & Archetype Resolution ──────────────────────────────

def normalize_player_name(name):
    """Canonical player key: lower-cased, trimmed, inner whitespace collapsed.

    Two display names refer to the same player iff their keys are equal.
    """
    if not name:
        return ""
    return WHITESPACE_RUN.sub(" ", name.strip().lower())


def resolve_archetype(player_key, player_archetypes):
    """Look up a player's archetype. Returns None when unknown."""
    return player_archetypes.get(player_key) or None


def normalize_archetype_label(label):
    """Case/whitespace-insensitive form of an archetype label."""
    return normalize_player_name(label)


class ArchetypeRegistry:
    """Assigns each archetype label a stable handle for one run.

    Labels are kept exactly as supplied unless fold_labels is set, in which
    case labels differing only by case or whitespace collapse onto the
    first-seen spelling. Either way the variants are remembered so the
    caller can report them.
    """

    def __init__(self, fold_labels=False):
        self.fold_labels = fold_labels
        self._handles = {}
        self._variants = {}

    def register(self, label):
        if label in self._handles:
            return self._handles[label]
        folded = normalize_archetype_label(label)
        variants = self._variants.setdefault(folded, [])
        if self.fold_labels and variants:
            handle = self._handles[variants[0]]
        else:
            handle = label
        variants.append(label)
        self._handles[label] = handle
        return handle

    def lookup(self, label):
        """Handle a label would get, without registering it."""
        if label in self._handles:
            return self._handles[label]
        variants = self._variants.get(normalize_archetype_label(label))
        if self.fold_labels and variants:
            return self._handles[variants[0]]
        return label

    def near_duplicates(self):
        """Groups of labels that differ only by case/whitespace."""
        return [list(v) for v in self._variants.values() if len(v) > 1]

    def __len__(self):
        return len(set(self._handles.values()))


# ─── Match Records ──────────────────────────────────────────────

def _parse_int(value):
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _clean_competitor(raw):
    players = (raw.get("Team") or {}).get("Players") or []
    player = players[0] if players else {}

    # Decklists sit on the competitor; older payloads put them on the player
    decklists = raw.get("Decklists") or player.get("Decklists") or []
    deck = ""
    if decklists:
        deck = decklists[0].get("DecklistName") or ""

    return {
        "name": (player.get("DisplayName") or "").strip(),
        "player_id": _parse_int(player.get("ID")),
        "deck": deck,
    }


def clean_match(raw, round_number=None):
    """Convert one provider match into a MatchRecord.

    Never rejects: missing competitors or names are kept as-is so the
    aggregation step can skip and count them.
    """
    competitors = [
        _clean_competitor(c)
        for c in (raw.get("Competitors") or [])
        if isinstance(c, dict)
    ]
    return {
        "round": round_number,
        "table": _parse_int(raw.get("TableNumber")),
        "result": raw.get("ResultString") or "",
        "competitors": competitors,
    }


def _round_sort_key(key):
    number = _parse_int(key)
    # Numbered rounds first, in numeric order (JSON keys arrive as strings)
    return (number is None, number or 0, str(key))


def clean_rounds(matches_by_round):
    """Flatten {round: [raw matches]} into MatchRecords, rounds in order."""
    records = []
    for key in sorted(matches_by_round, key=_round_sort_key):
        round_number = _parse_int(key)
        for raw in matches_by_round[key] or []:
            if isinstance(raw, dict):
                records.append(clean_match(raw, round_number))
    return records


# ─── Player Maps ────────────────────────────────────────────────

def extract_player_decks(records):
    """Build {canonical player key: deck name} from match records."""
    player_decks = {}
    for record in records:
        for c in record["competitors"]:
            key = normalize_player_name(c["name"])
            if key and c["deck"].strip():
                player_decks[key] = c["deck"]
    return player_decks


def extract_player_names(records):
    """Build {canonical player key: display name} from match records."""
    names = {}
    for record in records:
        for c in record["competitors"]:
            key = normalize_player_name(c["name"])
            if key:
                names[key] = c["name"]
    return names


def build_decklists(player_decks, player_names):
    """One decklist entry per mapped player, sorted by display name.

    Card lists are empty: the match feed only carries deck names.
    """
    decklists = []
    for key, archetype in player_decks.items():
        decklists.append({
            "playerName": player_names.get(key) or key,
            "archetype": archetype,
            "mainDeck": [],
            "sideboard": [],
        })
    decklists.sort(key=lambda d: d["playerName"])
    return decklists
