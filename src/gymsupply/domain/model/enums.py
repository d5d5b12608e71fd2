"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class CatalogField(StrEnum):
    """Comparable catalog attributes, valued by their spreadsheet column label."""

    NAME = "Name"
    BRAND = "Brand"
    CATEGORY = "Category"
    COST = "Cost"
    PREFERRED = "Preferred"
    URL = "URL"

    @property
    def attribute(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> CatalogField:
        wanted = label.strip().casefold()
        for member in cls:
            if member.value.casefold() == wanted or member.attribute == wanted:
                return member
        raise ValueError(f"Unknown catalog field: {label!r}")


class Preferred(StrEnum):
    """Preference tag carried by catalog items."""

    NONE = ""
    P = "P"
    C = "C"
    P_AND_C = "P+C"

    @classmethod
    def parse(cls, value: object) -> Preferred | None:
        """Map a loosely formatted tag onto a member, ``None`` when unrecognised."""

        if value is None:
            return cls.NONE
        compact = "".join(str(value).split()).upper()
        if compact in {"PC", "P&C", "C+P"}:
            return cls.P_AND_C
        try:
            return cls(compact)
        except ValueError:
            return None
