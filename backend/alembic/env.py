from __future__ import annotations

import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool
from sqlalchemy.engine import make_url

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from branch_api.core.config import get_settings  # noqa: E402
from branch_api.core.db import Base  # noqa: E402
import branch_api.models  # noqa: F401,E402

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

database_url = get_settings().database_url
# SQLite cannot ALTER most column changes in place; batch mode copies the table.
render_as_batch = make_url(database_url).get_backend_name() == "sqlite"


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=render_as_batch,
        **kwargs,
    )


def migrate_offline() -> None:
    """Emit the branch schema as SQL without a live connection."""
    _configure(url=database_url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def migrate_online() -> None:
    engine = create_engine(database_url, poolclass=pool.NullPool)
    with engine.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


if context.is_offline_mode():
    migrate_offline()
else:
    migrate_online()
