#!/usr/bin/env python3
"""
Seed a demo user with a ready-made voice profile.

Any existing user with the same name is removed first (with their drafts),
so the script can be re-run safely.

Usage:
    python scripts/seed_demo_user.py [--name "Alex Rivera"] [--create-tables]
"""

import argparse
import asyncio
import sys
from pathlib import Path

from sqlalchemy import delete, select

# Add project root to path so dispatch.* imports work
sys.path.insert(0, str(Path(__file__).parent.parent))

from dispatch.core.database import close_db, get_db_context, init_db  # noqa: E402
from dispatch.models import Draft, User  # noqa: E402
from dispatch.schemas.voice import UserInfo, VoiceProfileData  # noqa: E402
from dispatch.services.user_service import UserService  # noqa: E402

DEMO_USER = UserInfo(
    name="Alex Rivera",
    role="Senior Financial Advisor",
    company="Meridian Wealth Partners",
    industry="Financial Services",
)

DEMO_PROFILE = VoiceProfileData(
    tone=["direct", "confident", "empathetic"],
    sentence_style="mixed",
    vocabulary="professional",
    signature_phrases=[
        "Here's what most people get wrong:",
        "The math is simple, but the behavior isn't.",
        "I've seen this play out hundreds of times.",
        "Let's be honest about what's really happening here.",
        "The uncomfortable truth is",
    ],
    topics=[
        "retirement planning",
        "portfolio diversification",
        "behavioral finance",
        "market volatility",
        "wealth building mindset",
        "financial independence",
    ],
    avoid=[
        "synergy",
        "leverage (as a buzzword)",
        "circle back",
        "touch base",
        "at the end of the day",
        "excessive exclamation marks",
        "vague motivational fluff",
    ],
    raw_summary=(
        "Alex writes with the authority of a practitioner who has seen real outcomes, "
        "not a theorist. Posts tend to open with a provocative statement or "
        "counterintuitive observation, then back it with a specific example from client "
        "experience. They close by giving the reader something actionable, never "
        "leaving them with just a diagnosis."
    ),
)

DEMO_SAMPLES = [
    "Most investors think diversification means owning a lot of different things. It doesn't.\n\n"
    "I had a client come to me last year with 12 different mutual funds. He felt diversified. "
    "On paper, it looked diversified.\n\n"
    "Every single one of those funds had Apple as a top-5 holding.\n\n"
    "True diversification is about correlation, not count. The math is simple, but the behavior isn't.\n\n"
    "Here's what I tell every new client: own things that go up for different reasons.",
    "The market dropped 4% yesterday. My phone hasn't stopped.\n\n"
    "Most of the calls aren't about the drop. They're about the feeling the drop is creating.\n\n"
    "I've seen this play out hundreds of times. Fear isn't irrational, it's human. "
    "But it is expensive when it drives decisions.\n\n"
    "The uncomfortable truth is: your biggest financial risk isn't market volatility. "
    "It's your own reaction to it.\n\n"
    "Build a plan you can stick to when things feel worst. That's the whole game.",
]


async def remove_existing(name: str) -> int:
    """Delete users named `name` and their drafts. Returns users removed."""
    async with get_db_context() as session:
        result = await session.execute(select(User.id).where(User.name == name))
        user_ids = list(result.scalars().all())
        if not user_ids:
            return 0

        await session.execute(delete(Draft).where(Draft.user_id.in_(user_ids)))
        for user in (await session.execute(select(User).where(User.id.in_(user_ids)))).scalars():
            await session.delete(user)
        await session.commit()
        return len(user_ids)


async def seed(name: str, create_tables: bool) -> None:
    if create_tables:
        await init_db()

    try:
        removed = await remove_existing(name)
        if removed:
            print(f"Removed {removed} existing user(s) named {name!r}")

        user_info = DEMO_USER.model_copy(update={"name": name})
        user = await UserService().create_with_voice_profile(user_info, DEMO_PROFILE, DEMO_SAMPLES)
    finally:
        await close_db()

    print(f"Created demo user: {user.name} ({user.id})")
    print(f"  Role: {user.role} at {user.company}")
    print(f"  Industry: {user.industry}")
    print("\nUse this ID to try draft generation and cascades:")
    print(f"  User ID: {user.id}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Seed a demo user with a voice profile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--name", default=DEMO_USER.name, help="Demo user name (default: Alex Rivera)")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding (instead of running migrations)",
    )

    args = parser.parse_args()

    try:
        asyncio.run(seed(name=args.name, create_tables=args.create_tables))
    except Exception as e:
        print(f"Seed failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
