"""
Alembic environment configuration.

This script runs whenever Alembic performs a migration.
It connects to the ledger database using the application's
settings and knows about the ledger tables through Base.metadata.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from solar_ledger.config import get_settings
from solar_ledger.models import Base

# Alembic Config object, gives access to the alembic.ini values
config = context.config

# Set up logging from alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Tell Alembic about the models.
# Importing solar_ledger.models registers ledger_entries,
# financial_categories and credit_cards on Base.metadata.
# Autogenerate compares this metadata against the actual
# database and writes the difference as a new revision.
target_metadata = Base.metadata

# Override the database URL from the application settings
# instead of reading it from alembic.ini
database_url = get_settings().DATABASE_URL
config.set_main_option("sqlalchemy.url", database_url)

# SQLite cannot ALTER most constraints in place. Batch mode
# copies the table into a new one with the changed schema,
# so revisions such as widening card_label run on SQLite too.
render_as_batch = database_url.startswith("sqlite")


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Generates the SQL script without connecting to the database.
    Useful for reviewing a revision before applying it.
    """
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=render_as_batch,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Run migrations in 'online' mode.

    Connects to the database and applies changes directly.
    compare_type=True makes autogenerate notice column type
    changes such as a String length, not only new columns.
    """
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=render_as_batch,
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
