"""Round selection — parse round specs and filter matches by round."""

from pipeline.cleaning import _parse_int
from pipeline.constants import DEFAULT_ROUNDS


def _to_int(text, segment):
    try:
        return int(text.strip())
    except ValueError:
        raise ValueError(f"invalid round number in '{segment}'") from None


def parse_rounds(spec):
    """Parse a round spec like '4-8', '4,5,6' or '4-8,12-16,17'.

    Empty spec means the default rounds. Duplicates are dropped, first
    occurrence wins. Raises ValueError on malformed input.
    """
    if not spec or not spec.strip():
        return list(DEFAULT_ROUNDS)

    rounds = []
    seen = set()
    for segment in spec.split(","):
        segment = segment.strip()
        if "-" in segment:
            parts = segment.split("-")
            if len(parts) != 2:
                raise ValueError(f"invalid range format: '{segment}'")
            start, end = _to_int(parts[0], segment), _to_int(parts[1], segment)
            if start > end:
                raise ValueError(f"invalid range '{segment}': start > end")
            numbers = range(start, end + 1)
        else:
            numbers = [_to_int(segment, segment)]

        for n in numbers:
            if n not in seen:
                seen.add(n)
                rounds.append(n)

    return rounds


def filter_rounds(matches_by_round, rounds):
    """Keep only the requested rounds. Keys may be ints or numeric strings."""
    wanted = set(rounds)
    return {key: matches for key, matches in matches_by_round.items() if _parse_int(key) in wanted}


def missing_rounds(matches_by_round, rounds):
    """Requested rounds with no key in matches_by_round, in request order."""
    present = {_parse_int(key) for key in matches_by_round}
    return [r for r in rounds if r not in present]
