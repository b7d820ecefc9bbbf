from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class PossessionOutcome(str, Enum):
    """Result of a possession operation, richer than the plain boolean."""
    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE = "DUPLICATE"
    BACKEND_ERROR = "BACKEND_ERROR"


def _as_date(value: Any) -> Optional[dt.date]:
    if value is None or isinstance(value, dt.date):
        return value
    s = str(value)
    if len(s) > 10 and s[10] in "T ":
        s = s[:10]
    return dt.date.fromisoformat(s)


@dataclass(frozen=True)
class Possession:
    """One row of POSSEDER: owner_id held vehicle_id from start_date to end_date (None = ongoing)."""
    owner_id: int
    vehicle_id: int
    start_date: dt.date
    end_date: Optional[dt.date] = None

    @property
    def ongoing(self) -> bool:
        return self.end_date is None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Possession":
        return cls(
            owner_id=int(row["id_proprietaire"]),
            vehicle_id=int(row["id_vehicule"]),
            start_date=_as_date(row["date_debut_propriete"]),
            end_date=_as_date(row["date_fin_propriete"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "vehicle_id": self.vehicle_id,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
        }
