"""Pydantic models describing spreadsheet export rows."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _cell_to_text(value: object) -> object:
    """Spreadsheet cells arrive as JSON scalars; catalog attributes are text."""

    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, int | float):
        return str(value)
    return value


def _blank_to_none(value: object) -> object:
    value = _cell_to_text(value)
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SheetRow(BaseModel):
    """One row of the equipment list keyed by column header.

    Columns that are not catalog attributes are kept in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    part_number: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "EXOS Part Number", "Exos Part Number", "Part Number", "PartNumber", "part_number"
        ),
    )
    name: str | None = Field(
        default=None, validation_alias=AliasChoices("Item Name", "Name", "name")
    )
    brand: str | None = Field(default=None, validation_alias=AliasChoices("Brand", "brand"))
    category: str | None = Field(
        default=None, validation_alias=AliasChoices("Category", "category")
    )
    cost: str | None = Field(default=None, validation_alias=AliasChoices("Cost", "cost"))
    preferred: str | None = Field(
        default=None, validation_alias=AliasChoices("Preferred", "preferred")
    )
    url: str | None = Field(default=None, validation_alias=AliasChoices("URL", "Url", "url"))

    _normalize_part_number = field_validator("part_number", mode="before")(_blank_to_none)
    _normalize_cells = field_validator(
        "name", "brand", "category", "cost", "preferred", "url", mode="before"
    )(_cell_to_text)

    @property
    def has_name(self) -> bool:
        return bool(self.name and self.name.strip())

    @property
    def extras(self) -> dict[str, object]:
        return dict(self.model_extra or {})


class ErrorResponse(BaseModel):
    """Payload returned by the export script when it fails."""

    model_config = ConfigDict(extra="ignore")

    error: str
