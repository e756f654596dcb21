"""Ledger engines and the stores that feed them."""

from solar_ledger.services.catalogue import Catalogue
from solar_ledger.services.installments import InstallmentExpander
from solar_ledger.services.ledger_store import CatalogueStore, LedgerStore
from solar_ledger.services.settlement import SettlementCoordinator

__all__ = [
    "Catalogue",
    "CatalogueStore",
    "InstallmentExpander",
    "LedgerStore",
    "SettlementCoordinator",
]
