"""Known API-Football competitions and parsing of competition lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Sequence, Tuple


@dataclass(frozen=True)
class Competition:
    competition_id: int
    label: str


_COMPETITIONS: Dict[int, Competition] = {
    39: Competition(competition_id=39, label="Premier League"),
    140: Competition(competition_id=140, label="La Liga"),
    78: Competition(competition_id=78, label="Bundesliga"),
    135: Competition(competition_id=135, label="Serie A"),
    61: Competition(competition_id=61, label="Ligue 1"),
    2: Competition(competition_id=2, label="Champions League"),
}


def iter_competitions() -> Iterable[Competition]:
    """Return an iterator of all catalogued competitions."""

    return _COMPETITIONS.values()


def get_competition(competition_id: int) -> Competition:
    """Fetch a catalogued competition, raising KeyError if unknown."""

    if competition_id not in _COMPETITIONS:
        raise KeyError(f"No competition catalogued for id={competition_id!r}")
    return _COMPETITIONS[competition_id]


def _parse_entry(entry: str) -> Competition:
    text = entry.strip()
    if "=" in text:
        raw_id, label = text.split("=", 1)
        label = label.strip()
    else:
        raw_id, label = text, ""
    try:
        competition_id = int(raw_id.strip())
    except ValueError:
        raise ValueError(f"competition id must be an integer, got {raw_id!r}") from None
    if not label:
        try:
            label = get_competition(competition_id).label
        except KeyError:
            label = f"Competition {competition_id}"
    return Competition(competition_id=competition_id, label=label)


def parse_competitions(value: str | Sequence[str]) -> Tuple[Competition, ...]:
    """Parse ``"39=Premier League,140"`` style lists, keeping order and dropping repeats.

    Entries without a label fall back to the catalogue label.
    """

    entries = value.split(",") if isinstance(value, str) else list(value)
    seen: set[int] = set()
    competitions: list[Competition] = []
    for entry in entries:
        if not entry.strip():
            continue
        competition = _parse_entry(entry)
        if competition.competition_id in seen:
            continue
        seen.add(competition.competition_id)
        competitions.append(competition)
    return tuple(competitions)
