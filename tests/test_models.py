"""회원/팀 모델 테스트 — 양방향 연관관계 동기화.

Member/Team model tests — both sides of the association stay in step.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from querystudy.models import Member, Team


class TestChangeTeam:
    """소속 팀 변경 테스트."""

    async def test_new_member_appears_in_team(self, db: AsyncSession, teams, members):
        """팀과 함께 생성한 회원은 팀의 회원 목록에 포함된다."""
        team_a = teams["teamA"]
        assert [m.username for m in team_a.members] == ["member1", "member2"]
        assert members[0].team is team_a
        assert members[0].team_id == team_a.id

    async def test_change_team_updates_both_sides(self, db: AsyncSession, teams, members):
        """팀 변경 시 이전 팀에서 빠지고 새 팀에 추가된다."""
        member1 = members[0]
        team_a, team_b = teams["teamA"], teams["teamB"]

        member1.change_team(team_b)
        await db.flush()

        assert member1.team is team_b
        assert member1.team_id == team_b.id
        assert member1 not in team_a.members
        assert member1 in team_b.members

    def test_change_team_on_transient_objects(self):
        """세션 없이도 양쪽 참조가 동기화된다."""
        old, new = Team(name="old"), Team(name="new")
        member = Member(username="m", age=1, team=old)

        member.change_team(new)

        assert old.members == []
        assert new.members == [member]

    def test_repr_omits_team(self):
        """repr에는 팀이 포함되지 않는다."""
        member = Member(username="m", age=3, team=Team(name="t"))
        assert "team" not in repr(member).lower()
        assert "username='m'" in repr(member)
