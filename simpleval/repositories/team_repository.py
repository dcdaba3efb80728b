"""Repository de Team"""
from sqlalchemy.orm import Session
from sqlalchemy import select, update, delete, or_, func
from typing import List, Optional
from simpleval.models.team import Team
from simpleval.models.player import Player
from simpleval.models.match import Match


class TeamRepository:
    """Repository para operações de banco com Team"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Team]:
        """Obtém todos os times"""
        result = self.db.execute(select(Team).order_by(Team.id))
        return list(result.scalars().all())

    def get_by_id(self, team_id: int) -> Optional[Team]:
        """Obtém time por ID"""
        return self.db.get(Team, team_id)

    def get_by_code(self, team_code: str) -> Optional[Team]:
        """Obtém time pelo código curto"""
        result = self.db.execute(select(Team).filter(Team.team_code == team_code))
        return result.scalar_one_or_none()

    def count_matches(self, team_id: int) -> int:
        """Quantidade de partidas que referenciam o time"""
        result = self.db.execute(
            select(func.count(Match.id)).filter(
                or_(Match.team_a_id == team_id, Match.team_b_id == team_id)
            )
        )
        return result.scalar() or 0

    def create(self, team_data: dict) -> Team:
        """Cria novo time"""
        team = Team(**team_data)
        self.db.add(team)
        self.db.flush()
        return team

    def update(self, team: Team, team_data: dict) -> Team:
        """Atualiza time"""
        for key, value in team_data.items():
            setattr(team, key, value)
        self.db.flush()
        return team

    def delete(self, team: Team) -> None:
        """Deleta time, deixando seus jogadores sem time"""
        self.db.execute(
            update(Player).where(Player.team_id == team.id).values(team_id=None)
        )
        self.db.execute(delete(Team).where(Team.id == team.id))
