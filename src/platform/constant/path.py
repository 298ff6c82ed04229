from pathlib import Path


# Repository root (holds alembic.ini and .env)
BASE_DIR = Path(__file__).resolve().parents[3]

LOG_DIR = BASE_DIR / 'logs'

ALEMBIC_INI = BASE_DIR / 'alembic.ini'

# A local .env wins; the committed example keeps a fresh checkout bootable
ENV_FILE = BASE_DIR / '.env' if (BASE_DIR / '.env').exists() else BASE_DIR / '.env.example'
