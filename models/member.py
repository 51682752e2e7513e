from dataclasses import dataclass
from typing import Optional, Mapping, Any


@dataclass
class Member:
    """
    Represents a single gym member as shown in the Members table.
    """
    id: int
    name: str
    email: str
    phone: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Member":
        """Builds a Member from a Users row (sqlite3.Row or dict)."""
        return cls(
            id=int(row["id"]),
            name=row["name"],
            email=row["email"],
            phone=row["phone"] or None,
        )
