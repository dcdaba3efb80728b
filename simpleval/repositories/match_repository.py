"""Repository de Match e da relação MatchParticipant"""
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select, delete, func, or_
from typing import Iterable, List, Optional
from simpleval.models.match import Match
from simpleval.models.match_participant import MatchParticipant


class MatchRepository:
    """Repository para operações de banco com Match"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Match]:
        """Obtém todas as partidas, mais recentes primeiro"""
        result = self.db.execute(select(Match).order_by(Match.date.desc(), Match.id.desc()))
        return list(result.scalars().all())

    def get_by_id(self, match_id: int, with_participants: bool = False) -> Optional[Match]:
        """Obtém partida por ID"""
        query = select(Match).filter(Match.id == match_id)
        if with_participants:
            query = query.execution_options(populate_existing=True).options(
                selectinload(Match.participants).selectinload(MatchParticipant.player)
            )
        result = self.db.execute(query)
        return result.scalar_one_or_none()

    def get_for_team(self, team_id: int) -> List[Match]:
        """Partidas em que o time participou (qualquer lado)"""
        result = self.db.execute(
            select(Match)
            .filter(or_(Match.team_a_id == team_id, Match.team_b_id == team_id))
            .order_by(Match.date.desc())
        )
        return list(result.scalars().all())

    def create(self, match_data: dict) -> Match:
        """Insere partida (sem commit)"""
        match = Match(**match_data)
        self.db.add(match)
        self.db.flush()
        return match

    def update(self, match: Match, match_data: dict) -> Match:
        """Atualiza partida (sem commit)"""
        for key, value in match_data.items():
            setattr(match, key, value)
        self.db.flush()
        return match

    def delete(self, match_id: int) -> int:
        """Deleta a linha da partida; retorna linhas afetadas"""
        result = self.db.execute(delete(Match).where(Match.id == match_id))
        return result.rowcount


class MatchParticipantRepository:
    """Repository da relação N:N partida-jogador"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, match_id: int, player_id: int) -> Optional[MatchParticipant]:
        """Obtém uma linha da relação"""
        return self.db.get(MatchParticipant, (match_id, player_id))

    def list_for_match(self, match_id: int) -> List[MatchParticipant]:
        """Linhas da relação de uma partida"""
        result = self.db.execute(
            select(MatchParticipant)
            .filter(MatchParticipant.match_id == match_id)
            .order_by(MatchParticipant.player_id)
        )
        return list(result.scalars().all())

    def list_for_player(self, player_id: int) -> List[MatchParticipant]:
        """Partidas em que o jogador está no snapshot"""
        result = self.db.execute(
            select(MatchParticipant).filter(MatchParticipant.player_id == player_id)
        )
        return list(result.scalars().all())

    def count_for_match(self, match_id: int) -> int:
        """Quantidade de participantes de uma partida"""
        result = self.db.execute(
            select(func.count()).select_from(MatchParticipant).filter(
                MatchParticipant.match_id == match_id
            )
        )
        return result.scalar() or 0

    def add(self, match_id: int, player_id: int) -> MatchParticipant:
        """Insere uma linha (sem commit)"""
        participant = MatchParticipant(match_id=match_id, player_id=player_id)
        self.db.add(participant)
        self.db.flush()
        return participant

    def add_many(self, match_id: int, player_ids: Iterable[int]) -> List[MatchParticipant]:
        """Insere várias linhas de uma vez (sem commit)"""
        participants = [
            MatchParticipant(match_id=match_id, player_id=player_id)
            for player_id in player_ids
        ]
        self.db.add_all(participants)
        self.db.flush()
        return participants

    def remove(self, match_id: int, player_id: int) -> int:
        """Remove uma linha; retorna linhas afetadas"""
        result = self.db.execute(
            delete(MatchParticipant).where(
                MatchParticipant.match_id == match_id,
                MatchParticipant.player_id == player_id,
            )
        )
        return result.rowcount

    def clear(self, match_id: int) -> int:
        """Remove todas as linhas de uma partida; retorna linhas afetadas"""
        result = self.db.execute(
            delete(MatchParticipant).where(MatchParticipant.match_id == match_id)
        )
        return result.rowcount
