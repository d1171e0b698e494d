"""Core module for gc-stats-matcher."""

from dataclasses import dataclass
from typing import Optional

MATCHED_BY_JERSEY = 'jersey_number'
MATCHED_BY_NAME = 'name'


class HeaderNotFoundError(ValueError):
    """Raised when a CSV file is not a recognized GameChanger export."""


@dataclass(frozen=True)
class ParsedBattingStats:
    """Season batting line of one player."""

    gp: float = 0.0
    pa: float = 0.0
    ab: float = 0.0
    avg: float = 0.0
    obp: float = 0.0
    slg: float = 0.0
    ops: float = 0.0
    h: float = 0.0
    singles: float = 0.0
    doubles: float = 0.0
    triples: float = 0.0
    hr: float = 0.0
    rbi: float = 0.0
    r: float = 0.0
    bb: float = 0.0
    so: float = 0.0
    hbp: float = 0.0
    sb: float = 0.0
    cs: float = 0.0


@dataclass(frozen=True)
class ParsedFieldingStats:
    """Season fielding line of one player."""

    tc: float = 0.0
    a: float = 0.0
    po: float = 0.0
    fpct: float = 0.0
    e: float = 0.0
    dp: float = 0.0


@dataclass(frozen=True)
class ParsedPitchingStats:
    """Season pitching line; only exists for players with innings pitched."""

    ip: float         # Literal thirds notation, 6.2 = 6 2/3 innings
    era: float = 0.0
    whip: float = 0.0
    so: float = 0.0
    bb: float = 0.0
    h: float = 0.0
    r: float = 0.0
    er: float = 0.0


@dataclass(frozen=True)
class ParsedPlayerStats:
    """One data row of a GameChanger export."""

    jersey_number: int
    last_name: str
    first_name: str
    batting: ParsedBattingStats
    fielding: ParsedFieldingStats
    pitching: Optional[ParsedPitchingStats] = None

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()


@dataclass(frozen=True)
class RosterPlayer:
    """Roster entry supplied by the caller."""

    id: str
    name: str
    jersey_number: Optional[int] = None


@dataclass(frozen=True)
class MatchResult:
    """Result of matching a parsed export row against the roster."""

    parsed: ParsedPlayerStats
    player_id: Optional[str]
    player_name: Optional[str]
    matched_by: Optional[str]     # jersey_number, name or None
    confidence: float = 0.0       # 0.0 – 1.0
    issues: tuple[str, ...] = ()

    def __post_init__(self):
        if (self.player_id is None) != (self.matched_by is None):
            raise ValueError(
                f"player_id und matched_by inkonsistent: "
                f"{self.player_id!r} / {self.matched_by!r}"
            )

    @property
    def is_matched(self) -> bool:
        return self.player_id is not None
