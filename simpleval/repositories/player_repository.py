"""Repository de Player"""
from sqlalchemy.orm import Session
from sqlalchemy import select, delete, func
from typing import List, Optional
from simpleval.models.player import Player
from simpleval.models.match_participant import MatchParticipant


class PlayerRepository:
    """Repository para operações de banco com Player"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, team_id: Optional[int] = None) -> List[Player]:
        """Obtém jogadores, opcionalmente filtrados por time"""
        query = select(Player)
        if team_id is not None:
            query = query.filter(Player.team_id == team_id)
        result = self.db.execute(query.order_by(Player.id))
        return list(result.scalars().all())

    def get_by_id(self, player_id: int) -> Optional[Player]:
        """Obtém jogador por ID"""
        return self.db.get(Player, player_id)

    def get_roster(self, team_id: int, statuses: List[str], for_update: bool = False) -> List[Player]:
        """Jogadores do time com os status informados, em ordem de ID"""
        query = (
            select(Player)
            .filter(Player.team_id == team_id, Player.status.in_(statuses))
            .order_by(Player.id)
        )
        if for_update:
            query = query.with_for_update()
        result = self.db.execute(query)
        return list(result.scalars().all())

    def count_participations(self, player_id: int) -> int:
        """Quantidade de snapshots de partida que incluem o jogador"""
        result = self.db.execute(
            select(func.count()).select_from(MatchParticipant).filter(
                MatchParticipant.player_id == player_id
            )
        )
        return result.scalar() or 0

    def create(self, player_data: dict) -> Player:
        """Cria novo jogador"""
        player = Player(**player_data)
        self.db.add(player)
        self.db.flush()
        return player

    def update(self, player: Player, player_data: dict) -> Player:
        """Atualiza jogador"""
        for key, value in player_data.items():
            setattr(player, key, value)
        self.db.flush()
        return player

    def delete(self, player: Player) -> None:
        """Deleta jogador"""
        self.db.execute(delete(Player).where(Player.id == player.id))
