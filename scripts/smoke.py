# scripts/smoke.py
"""
Smoke Test Script for the polydict load pipelines.

Loads the bundled mock data into a throwaway store and prints what landed.

Usage
-----
1. In-memory store (nothing is kept):
    $ uv run python scripts/smoke.py

2. A real store:
    $ uv run python scripts/smoke.py --database-url sqlite:///polydict.db
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path

from dotenv import load_dotenv

from polydict.pipelines import run_migration, run_seed
from polydict.store import queries
from polydict.store.session import open_store

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

MOCK_DIR = Path(__file__).resolve().parents[1] / "mock-data"
LANGUAGES = ["en", "de", "it", "es"]


def main() -> None:
    """Run migrate + seed, then inspect the store."""
    parser = argparse.ArgumentParser(description="Run the polydict smoke test")
    parser.add_argument("--database-url", "-d", default="sqlite://", help="SQLAlchemy URL")
    args = parser.parse_args()

    try:
        with open_store(args.database_url) as session:
            migrated = run_migration(session, MOCK_DIR / "db", LANGUAGES)
            seeded = run_seed(session, MOCK_DIR / "seedDataSets.json")

            print("\n" + "=" * 60)
            print("✅ Load Finished Successfully!")
            print("=" * 60)
            print(f"\n📦 migrate: {migrated.as_dict()}")
            print(f"📦 seed:    {seeded.as_dict()}")

            print(f"\n📚 Words in store: {queries.count_words(session)}")
            for word in queries.list_words(session):
                base = word.base_word.text if word.base_word else "?"
                langs = ", ".join(f"{t.language}={t.text}" for t in word.translations)
                print(f"  - {word.word_id}: {base} [{langs}]")
    except Exception as exc:
        print(f"\n❌ Smoke test crashed: {exc}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
