"""
Pydantic schemas for reference data: categories and cards.
"""

from pydantic import BaseModel, ConfigDict, Field

from solar_ledger.models.enums import EntryKind


class Category(BaseModel):
    """A financial category as the engines see it."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    kind: EntryKind
    classification: str = ""
    managerial_group: str | None = None
    show_in_statement: bool = True
    active: bool = True


class CardConfig(BaseModel):
    """Billing cycle of one credit card."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str = Field(min_length=1, max_length=120)
    last_digits: str | None = Field(default=None, max_length=4)
    closing_day: int = Field(ge=1, le=31)
    due_day: int = Field(ge=1, le=31)
    active: bool = True

    @property
    def display_label(self) -> str:
        """Name as written into card-expense descriptions."""
        if self.last_digits:
            return f"{self.name} **** {self.last_digits}"
        return self.name


# --- Request Schemas ---

class CategoryCreate(BaseModel):
    id: str | None = Field(default=None, max_length=120)
    name: str = Field(min_length=1, max_length=120)
    kind: EntryKind
    classification: str = Field(default="", max_length=120)
    managerial_group: str | None = Field(default=None, max_length=120)
    show_in_statement: bool = True
    active: bool = True


class CardCreate(BaseModel):
    id: str | None = Field(default=None, max_length=120)
    name: str = Field(min_length=1, max_length=120)
    card_number: str | None = Field(default=None, max_length=32)
    closing_day: int = Field(default=1, ge=1, le=31)
    due_day: int = Field(default=10, ge=1, le=31)
    active: bool = True

    @property
    def last_digits(self) -> str | None:
        """Only the last four digits of a card number are kept."""
        if not self.card_number or not self.card_number.strip():
            return None
        return self.card_number.strip()[-4:]
