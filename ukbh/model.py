from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Optional

from .divisions import ALL_DIVISIONS, Division


@total_ordering
@dataclass(frozen=True)
class BankHoliday:
    """One bank holiday and the divisions that observe it.

    ``date`` is in the calendar's date representation (``datetime.date`` or
    ``pandas.Timestamp``). ``notes`` carries GOV.UK's remark, typically blank
    or "Substitute day".
    """

    date: Any
    title: str
    notes: str = ""
    bunting: bool = False
    divisions: frozenset[Division] = ALL_DIVISIONS

    def __post_init__(self) -> None:
        divisions = frozenset(self.divisions)
        if not divisions:
            raise ValueError(f"{self.title!r} must apply to at least one division")
        object.__setattr__(self, "divisions", divisions)

    @property
    def substitute(self) -> bool:
        return "substitute day" in self.notes.lower()

    @property
    def is_common(self) -> bool:
        return self.divisions == ALL_DIVISIONS

    def applies_to(self, division: Optional[Division]) -> bool:
        # None selects only holidays shared by every division.
        if division is None:
            return self.is_common
        return division in self.divisions

    def __lt__(self, other: "BankHoliday") -> bool:
        if not isinstance(other, BankHoliday):
            return NotImplemented
        return (self.date, self.title) < (other.date, other.title)

    def __str__(self) -> str:
        text = f"{self.date:%Y-%m-%d} - {self.title}"
        if self.notes:
            text += f" ({self.notes})"
        return text


__all__ = ["BankHoliday"]
