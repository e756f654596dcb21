"""
Result of a settle / reverse / cancel request.
"""

from pydantic import BaseModel, Field

from solar_ledger.schemas.ledger import LedgerEntry


class SettlementResult(BaseModel):
    """
    Outcome of a status transition over one or more entries.

    Transitions are applied one member at a time and are not rolled
    back. A failure on member k leaves members before k transitioned
    (succeeded), member k in failed, and everything after k in
    skipped, untouched.
    """
    succeeded: list[str] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)
    skipped: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    entries: list[LedgerEntry] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed and not self.errors and not self.skipped
