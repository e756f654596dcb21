"""
Solar Ledger: FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI

from solar_ledger.config import get_settings
from solar_ledger.logging_config import configure_logging
from solar_ledger.api.health import router as health_router
from solar_ledger.api.entries import router as entries_router
from solar_ledger.api.cards import router as cards_router
from solar_ledger.api.categories import router as categories_router
from solar_ledger.api.invoices import router as invoices_router
from solar_ledger.api.statements import router as statements_router
from solar_ledger.api.overview import router as overview_router

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, json_output=settings.LOG_JSON)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Back-office ledger: card invoices, recurrences and the DRE",
)

# Register routers
app.include_router(health_router)
app.include_router(entries_router)
app.include_router(cards_router)
app.include_router(categories_router)
app.include_router(invoices_router)
app.include_router(statements_router)
app.include_router(overview_router)
