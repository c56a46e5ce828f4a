import argparse
import asyncio
import sys
import os
import logging
from pathlib import Path

sys.path.append(os.getcwd())

from app.core.config import settings
from app.db.session import AsyncSessionLocal
from app.services.recipe_import import (
    RecipeImportError,
    import_recipes,
    import_recipes_from_url,
    parse_recipes_csv,
)

logging.basicConfig(level=logging.INFO, handlers=[logging.StreamHandler(sys.stdout)])


async def run(csv_path: Path | None, url: str, timeout: float) -> int:
    async with AsyncSessionLocal() as db:
        if csv_path is not None:
            print(f"Importing recipes from {csv_path}...")
            recipes = parse_recipes_csv(csv_path.read_text(encoding="utf-8"))
            return await import_recipes(db, recipes)

        print(f"Importing recipes from {url or '<no url configured>'}...")
        return await import_recipes_from_url(db, url, timeout)


def main() -> int:
    parser = argparse.ArgumentParser(description="Import recipes from a CSV export")
    parser.add_argument("--file", type=Path, help="local CSV file to import")
    parser.add_argument("--url", default=settings.GOOGLE_SHEET_URL, help="CSV download url")
    parser.add_argument("--timeout", type=float, default=settings.DOWNLOAD_TIMEOUT)
    args = parser.parse_args()

    try:
        count = asyncio.run(run(args.file, args.url, args.timeout))
    except RecipeImportError as e:
        print(f"Import failed: {e}")
        return 1

    print(f"Successfully inserted {count} recipes.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
