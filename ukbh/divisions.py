from __future__ import annotations

from enum import Enum


class Division(Enum):
    """Parts of the UK with shared bank holiday dates."""

    ENGLAND_AND_WALES = "england-and-wales"
    SCOTLAND = "scotland"
    NORTHERN_IRELAND = "northern-ireland"

    @property
    def title(self) -> str:
        return _TITLES[self]

    @classmethod
    def all(cls) -> tuple["Division", ...]:
        return (cls.ENGLAND_AND_WALES, cls.SCOTLAND, cls.NORTHERN_IRELAND)

    @classmethod
    def parse(cls, text: str) -> "Division":
        """Resolve a GOV.UK key, enum name or English name (case-insensitive)."""
        key = (text or "").strip().lower()
        for division in cls:
            candidates = {
                division.value,
                division.name.lower(),
                division.name.lower().replace("_", "-"),
                division.title.lower(),
            }
            if key in candidates:
                return division
        raise ValueError(f"Unknown division: {text!r}")

    def __str__(self) -> str:
        return self.title


_TITLES = {
    Division.ENGLAND_AND_WALES: "England and Wales",
    Division.SCOTLAND: "Scotland",
    Division.NORTHERN_IRELAND: "Northern Ireland",
}

ALL_DIVISIONS: frozenset[Division] = frozenset(Division.all())


__all__ = ["ALL_DIVISIONS", "Division"]
