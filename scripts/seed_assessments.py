"""
Seed assessment types and questions from an extracted questions file.

Usage:
    python scripts/seed_assessments.py path/to/assessment_questions.json
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path so we can import app modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.db.session import AsyncSessionLocal
from app.services.assessment_seed import load_questions, seed_assessment_types


async def seed(questions_path: Path) -> int:
    items = load_questions(questions_path)
    print(f"Loaded {len(items)} questions from {questions_path}")

    async with AsyncSessionLocal() as db:
        summary = await seed_assessment_types(db, items)
        await db.commit()

    print("\n✓ Database seeding completed")
    print(f"  - Assessment types created: {len(summary.created_types)}")
    for name in summary.created_types:
        print(f"      {name}")
    if summary.skipped_types:
        print(f"  - Already present (skipped): {', '.join(summary.skipped_types)}")
    print(f"  - Questions inserted: {summary.questions_inserted}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed assessment types and questions")
    parser.add_argument("questions_file", type=Path, help="JSON list of extracted questions")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if not args.questions_file.exists():
        print(f"❌ File not found: {args.questions_file}")
        return 1

    try:
        return asyncio.run(seed(args.questions_file))
    except ValueError as exc:
        print(f"❌ Invalid questions file: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
