"""팀 SQLAlchemy ORM 모델 정의.

Team SQLAlchemy ORM model definition.

Tables:
    - team: 회원이 소속되는 팀 (Team that members belong to)
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from querystudy.database import Base


class Team(Base):
    """팀 모델 — 회원 컬렉션을 가진 일대다 관계의 '일' 쪽.

    Team model — The "one" side of the team/member relationship.
    The foreign key lives on ``member``; this side only mirrors it.

    Attributes:
        id: 팀 고유 식별자 (Auto-increment primary key)
        name: 팀 이름 (Team name)

    Relationships:
        members: 소속 회원 목록 (Members of this team, ordered by id)
    """

    __tablename__ = "team"

    # 팀 고유 식별자 — Team primary key (column name: team_id)
    id: Mapped[int] = mapped_column("team_id", Integer, primary_key=True, autoincrement=True)
    # 팀 이름 — Team name, unique (uq_team_name)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # 관계 — 팀 삭제 시 회원은 남고 팀 참조만 해제 (Members survive team deletion, FK set to NULL)
    members = relationship(
        "Member",
        back_populates="team",
        order_by="Member.id",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_team_name"),
    )

    def __repr__(self) -> str:
        return f"Team(id={self.id!r}, name={self.name!r})"
