"""
Alembic migration environment for the planner tables.

The URL comes from DATABASE_URL_SYNC unless overridden on the command line:
    alembic -x db_url=sqlite:///./planner.db upgrade head
SQLite targets run in batch mode so ALTERs in later revisions work there too.
"""

from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from eventplanner.db.base import Base
from eventplanner.models import Event, Guest, Vendor  # noqa: F401 - register tables for autogenerate
from eventplanner.core.config import get_settings

config = context.config
settings = get_settings()

db_url = context.get_x_argument(as_dictionary=True).get("db_url", settings.DATABASE_URL_SYNC)
config.set_main_option("sqlalchemy.url", db_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
is_sqlite = db_url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit the SQL script without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=is_sqlite,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=is_sqlite,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
