from dataclasses import dataclass
from typing import Mapping, Any


@dataclass
class Subscription:
    """
    A subscription plan offered by the gym (e.g., 'Monthly', 30 days, 25.0).
    """
    id: int
    name: str
    description: str
    duration_days: int
    price: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Subscription":
        return cls(
            id=int(row["id"]),
            name=row["name"],
            description=row["description"] or "",
            duration_days=int(row["duration_days"]),
            price=float(row["price"]),
        )
