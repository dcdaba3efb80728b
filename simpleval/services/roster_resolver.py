"""Resolução do elenco atual de um time"""
from sqlalchemy.orm import Session
from typing import Iterable, List, Optional
from simpleval.models.enums import RecordStatus
from simpleval.models.player import Player
from simpleval.repositories.player_repository import PlayerRepository


class RosterResolver:
    """
    Lê os jogadores atualmente vinculados a um time (Player.team_id).

    Sempre consulta o banco; time desconhecido ou sem jogadores devolve
    lista vazia. A ordem é por ID do jogador, o que torna o snapshot
    determinístico.
    """

    DEFAULT_STATUSES = (RecordStatus.ACTIVE.value,)

    def __init__(self, db: Session, statuses: Optional[Iterable[str]] = None):
        self.repository = PlayerRepository(db)
        self.statuses = list(statuses or self.DEFAULT_STATUSES)

    def resolve_roster(self, team_id: int, for_update: bool = False) -> List[Player]:
        """Jogadores ativos do time, ordenados"""
        return self.repository.get_roster(team_id, self.statuses, for_update=for_update)
