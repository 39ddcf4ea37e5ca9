"""Seed synthetic users with active dating profiles.

Writes the new user ids, one per line, so ``scripts/load_test.py`` can drive
swipes for them.
Usage: python -m scripts.seed_profiles [--count 100] [--output seeded_users.txt]
"""
import argparse
import asyncio
import random
import sys
import uuid
from datetime import date
from pathlib import Path

sys.path.insert(0, ".")

from matchmaker.database import async_session_factory, engine
from matchmaker.models import DatingPhoto, DatingPreference, DatingProfile, User
from matchmaker.models.enums import Gender

DEFAULT_COUNT = 100
DEFAULT_OUTPUT = "seeded_users.txt"

FIRST_NAMES = ["Alex", "Sam", "Jordan", "Taylor", "Morgan", "Casey", "Riley", "Jamie"]
LAST_NAMES = ["Nguyen", "Smith", "Garcia", "Okafor", "Kowalski", "Tanaka", "Silva"]
BIOS = [
    "Weekend hiker, weekday coffee snob.",
    "Looking for someone to share bad movies with.",
    "Dog person. Will show you photos of my dog.",
    "Learning to cook one recipe at a time.",
    None,
]


def random_user() -> User:
    user_id = uuid.uuid4()
    photos = [
        DatingPhoto(url=f"https://cdn.example.com/seed/{user_id}/{i}.jpg", order=i)
        for i in range(random.randint(1, 6))
    ]
    profile = DatingProfile(
        bio=random.choice(BIOS),
        is_active=True,
        photos=photos,
        preferences=DatingPreference(
            gender=None,
            age_min=random.randint(18, 30),
            age_max=random.randint(31, 60),
            max_distance=random.choice([None, 10, 25, 50]),
        ),
    )
    return User(
        id=user_id,
        full_name=f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
        gender=random.choice([Gender.MALE.value, Gender.FEMALE.value]),
        date_of_birth=date(random.randint(1975, 2004), random.randint(1, 12), random.randint(1, 28)),
        dating_profile=profile,
    )


async def seed(count: int, output: Path) -> list[uuid.UUID]:
    users = [random_user() for _ in range(count)]
    async with async_session_factory() as session:
        session.add_all(users)
        await session.commit()
    await engine.dispose()

    user_ids = [user.id for user in users]
    output.write_text("".join(f"{uid}\n" for uid in user_ids))
    print(f"Seeded {len(user_ids)} users with profiles -> {output}")
    return user_ids


def main():
    parser = argparse.ArgumentParser(description="Seed dating profiles")
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT, help="Number of users to create")
    parser.add_argument("--output", type=Path, default=Path(DEFAULT_OUTPUT), help="File for the new user ids")
    args = parser.parse_args()

    asyncio.run(seed(args.count, args.output))


if __name__ == "__main__":
    main()
