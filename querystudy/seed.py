"""초기 데이터 시드 스크립트 — 팀 2개와 회원 100명 생성.

Seed script — Creates two teams and one hundred members for local runs.

Usage:
    python -m querystudy.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - 100명 회원: member0 ~ member99, 나이 = 번호, 짝수는 teamA, 홀수는 teamB
      (100 members: member{i} aged i; even i in teamA, odd i in teamB)
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.database import Base, async_session, engine
from querystudy.models import Member, Team

SEED_MEMBER_COUNT: int = 100


async def seed_members(db: AsyncSession, count: int = SEED_MEMBER_COUNT) -> bool:
    """팀과 회원을 추가합니다. 이미 팀이 있으면 건너뜁니다.

    Insert the seed teams and members unless any team already exists.

    Returns:
        bool: 시드 수행 여부 (True when data was inserted)
    """
    # 이미 시드되었는지 확인 — Already seeded if any team exists
    result = await db.execute(select(Team).limit(1))
    if result.scalar_one_or_none() is not None:
        return False

    team_a = Team(name="teamA")
    team_b = Team(name="teamB")
    db.add_all([team_a, team_b])

    for i in range(count):
        db.add(Member(username=f"member{i}", age=i, team=team_a if i % 2 == 0 else team_b))

    await db.flush()
    return True


async def seed() -> None:
    """테이블을 만들고 시드 데이터를 넣습니다 (Create tables and insert seed data)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        async with async_session() as db:
            if not await seed_members(db):
                print("Already seeded. Skipping.")
                return
            await db.commit()
            print(f"Seeded 2 teams and {SEED_MEMBER_COUNT} members.")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
