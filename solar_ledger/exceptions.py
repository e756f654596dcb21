"""
Domain errors.

Both derive from ValueError so the routers can keep the usual
``except ValueError`` handling and map them to HTTP status codes.
Input validation does not raise: it returns field-level error maps.
"""

from solar_ledger.models.enums import EntryStatus


class EntryNotFoundError(ValueError):
    def __init__(self, entry_id: str):
        super().__init__(f"Entry {entry_id} not found")
        self.entry_id = entry_id


class InvalidTransitionError(ValueError):
    def __init__(
        self, entry_id: str, current: EntryStatus, target: EntryStatus
    ):
        super().__init__(
            f"Entry {entry_id} cannot go from "
            f"{current.value} to {target.value}"
        )
        self.entry_id = entry_id
        self.current = current
        self.target = target
