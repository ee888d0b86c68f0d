"""
Script to create the quotes table if it doesn't exist.
The server does the same on every start; this is for preparing a database ahead of a deploy.

Usage:
    python create_all_tables.py

This will:
1. Pick the storage engine from the environment (.env is honoured)
2. Create the quotes table when it is missing
3. Report whether the table exists afterwards
"""
import sys
import logging

from config import load_settings
from errors import StorageError
from Quote_module.Quote_store import create_quote_store

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def main() -> int:
    settings = load_settings()
    store = create_quote_store(settings)
    logger.info(f"Storage engine: {store.engine_name}")

    try:
        existed = store.table_exists()
        store.initialize()
        present = store.table_exists()
    except StorageError as e:
        logger.error(f"❌ Error preparing database: {e}")
        return 1
    finally:
        store.dispose()

    if existed:
        logger.info("✓ quotes table already exists")
    elif present:
        logger.info("✓ quotes table created")
    else:
        logger.error("✗ quotes table is still missing")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
