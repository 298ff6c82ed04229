#!/usr/bin/env python3
"""
Reset the cinema booking database to an empty, fully migrated schema.

PostgreSQL: the database is dropped (open sessions are terminated) and created again.
SQLite: the database file is deleted.
Both then run `alembic upgrade head`. Demo data is a separate step:
`python script/seed_data.py`.
"""

import asyncio
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import create_async_engine

from src.platform.config.core_setting import settings
from src.platform.constant.path import ALEMBIC_INI

# PostgreSQL refuses CREATE right after DROP while the catalog is still settling
DB_SETTLE_SECONDS = 1


def _quote_ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


async def _recreate_postgres_db(url: URL) -> None:
    db_name = url.database or ''
    admin_engine = create_async_engine(url.set(database='postgres'), isolation_level='AUTOCOMMIT')
    try:
        async with admin_engine.connect() as conn:
            await conn.execute(
                text(
                    'SELECT pg_terminate_backend(pid) FROM pg_stat_activity '
                    'WHERE datname = :db_name AND pid <> pg_backend_pid()'
                ),
                {'db_name': db_name},
            )
            await conn.execute(text(f'DROP DATABASE IF EXISTS {_quote_ident(db_name)}'))
            print(f"   ✅ Database '{db_name}' dropped")

            await asyncio.sleep(DB_SETTLE_SECONDS)

            await conn.execute(text(f'CREATE DATABASE {_quote_ident(db_name)}'))
            print(f"   ✅ Database '{db_name}' created")
    finally:
        await admin_engine.dispose()


def _remove_sqlite_file(url: URL) -> None:
    if not url.database or url.database == ':memory:':
        return
    path = Path(url.database)
    if path.exists():
        path.unlink()
        print(f"   ✅ SQLite file '{path}' removed")
    else:
        print(f"   ℹ️  SQLite file '{path}' does not exist yet")


def _upgrade_to_head() -> None:
    # env.py drives its own event loop, so this must run outside asyncio.run()
    print("   🔄 Running 'alembic upgrade head'...")
    command.upgrade(Config(str(ALEMBIC_INI)), 'head')
    print('   ✅ Database migrations completed')


def reset_database() -> None:
    url = make_url(settings.DATABASE_URL_ASYNC)
    print(f'Database URL: {url.render_as_string(hide_password=True)}')

    print('🗑️ Dropping database...')
    if settings.IS_SQLITE:
        _remove_sqlite_file(url)
    else:
        asyncio.run(_recreate_postgres_db(url))

    print('🏗️ Running database migrations...')
    _upgrade_to_head()


def main() -> int:
    print('🔄 Starting database reset...')
    print('=' * 50)
    try:
        reset_database()
    except Exception as e:
        print(f'❌ Reset failed: {type(e).__name__}: {e}')
        return 1

    print('=' * 50)
    print('✅ Database reset completed!')
    print('💡 To seed demo data, run: python script/seed_data.py')
    return 0


if __name__ == '__main__':
    sys.exit(main())
