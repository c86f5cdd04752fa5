"""CLI tool for loading the category and location type taxonomies."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from wit.config import AppConfig, load_config, settings
from wit.db import close_db, create_engine, create_session_factory, init_db
from wit.seeds import seed_all


async def _seed(config: AppConfig) -> dict[str, int]:
    engine = create_engine(config.database_url)
    try:
        await init_db(engine)
        session_factory = create_session_factory(engine)
        async with session_factory() as session:
            return await seed_all(session)
    finally:
        await close_db(engine)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for wit-seed CLI."""
    parser = argparse.ArgumentParser(
        description="Create the WIT tables and load the built-in taxonomies.",
        prog="wit-seed",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.yaml (default: WIT_CONFIG_FILE or ./config.yaml)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = load_config(args.config or settings.config_file)
    try:
        counts = asyncio.run(_seed(config))
    except Exception as e:
        print(f"Error seeding database: {e}", file=sys.stderr)
        return 1

    print(f"Categories inserted: {counts['categories']}")
    print(f"Location types inserted: {counts['location_types']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
