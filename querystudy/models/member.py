"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.

Tables:
    - member: 팀에 소속될 수 있는 회원 (Member, optionally assigned to a team)
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from querystudy.database import Base

if TYPE_CHECKING:  # pragma: no cover
    from querystudy.models.team import Team


class Member(Base):
    """회원 모델 — 팀과의 연관관계의 주인 (FK 보유).

    Member model — Owning side of the member/team association.
    ``team`` is loaded lazily; async callers must eager-load it
    (``selectinload`` / fetch join) before touching it.

    Attributes:
        id: 회원 고유 식별자 (Auto-increment primary key)
        username: 회원 이름 (Username, nullable)
        age: 나이 (Age, defaults to 0)
        team_id: 소속 팀 FK (Team foreign key, nullable)

    Relationships:
        team: 소속 팀 (Team this member belongs to)
    """

    __tablename__ = "member"

    # 회원 고유 식별자 — Member primary key (column name: member_id)
    id: Mapped[int] = mapped_column("member_id", Integer, primary_key=True, autoincrement=True)
    # 회원 이름 — nullable: 정렬 시 nulls last 확인용 (Nullable, exercised by nulls-last ordering)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    # 나이 — Age in years
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 소속 팀 FK — Team FK (SET NULL: 팀 삭제 시 소속 해제)
    team_id: Mapped[int | None] = mapped_column(
        "team_id", Integer, ForeignKey("team.team_id", ondelete="SET NULL"), nullable=True, index=True
    )

    # 관계 — Relationship (lazy select by default)
    team = relationship("Team", back_populates="members")

    def change_team(self, team: "Team") -> None:
        """소속 팀을 변경합니다. 양쪽 참조를 함께 갱신하는 유일한 경로.

        Move this member to ``team``. back_populates keeps ``Team.members``
        of both the previous and the new team in step with ``self.team``.
        """
        self.team = team

    def __repr__(self) -> str:
        # team은 제외 — 양방향 참조 순환 방지 (team omitted to avoid recursive repr)
        return f"Member(id={self.id!r}, username={self.username!r}, age={self.age!r})"
