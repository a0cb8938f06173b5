"""
JSON Import Script for Tracking Plans

Usage:
    python scripts/import_plans.py <path-to-json>

JSON Format:
    [{"name": ..., "description": ..., "events": [{"name": ..., "type": ...,
      "description": ..., "properties": [{"name": ..., "type": ..., "description": ...}]}]}]

    A top-level object with a "tracking_plans" list is accepted as well.
"""

import sys
import json
import asyncio
from pathlib import Path

# Add parent directory to path to import catalog modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog.core.database import AsyncSessionLocal, async_engine
from catalog.services.importer import ImportService


def load_payloads(file_path: Path) -> list:
    with open(file_path, 'r', encoding='utf-8') as f:
        document = json.load(f)

    if isinstance(document, dict):
        document = document.get("tracking_plans", [])

    if not isinstance(document, list):
        print("Error: JSON must be a list of tracking plans")
        sys.exit(1)

    return document


async def import_file(file_path: str):
    """
    Import tracking plans from a JSON file

    Args:
        file_path: Path to JSON file
    """
    file_path = Path(file_path)

    if not file_path.exists():
        print(f"Error: File not found: {file_path}")
        sys.exit(1)

    print(f"Starting import from: {file_path}")
    payloads = load_payloads(file_path)

    try:
        async with AsyncSessionLocal() as session:
            counts = await ImportService(session).import_tracking_plans(payloads)
    finally:
        await async_engine.dispose()

    print("\n" + "=" * 50)
    print("Import completed!")
    print(f"Total processed: {len(payloads)}")
    print(f"Created: {counts['created']}")
    print(f"Conflicts: {counts['conflicts']}")
    print(f"Invalid: {counts['invalid']}")
    print("=" * 50)


def main():
    if len(sys.argv) != 2:
        print("Usage: python scripts/import_plans.py <path-to-json>")
        sys.exit(1)

    asyncio.run(import_file(sys.argv[1]))


if __name__ == "__main__":
    main()
