"""Migration environment for the users/tasks schema.

The database URL comes from DATABASE_URL via app settings, or from
``alembic -x db_url=...`` for one-off runs against another database.
SQLite databases are migrated in batch mode so ALTERs work there too.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

from app.core.config import get_settings
from app.models import Base, Task, User  # noqa: F401  (registers both tables)

config = context.config
# alembic.ini carries no logging sections; fileConfig raises KeyError without them.
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except KeyError:
        pass

target_metadata = Base.metadata


def get_url() -> str:
    return context.get_x_argument(as_dictionary=True).get("db_url") or get_settings().DATABASE_URL


def _configure_kwargs(url: str) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit SQL for the migrations without connecting."""
    url = get_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = get_url()
    connectable = create_engine(url, poolclass=NullPool)
    try:
        with connectable.connect() as connection:
            context.configure(connection=connection, **_configure_kwargs(url))
            with context.begin_transaction():
                context.run_migrations()
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
