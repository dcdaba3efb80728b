"""Verificação de integridade de partidas e snapshots de elenco"""
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from typing import Optional, Dict, Any
import logging
from simpleval.core.clock import utcnow
from simpleval.core.config import settings
from simpleval.models.match import Match
from simpleval.models.match_participant import MatchParticipant
from simpleval.models.player import Player
from simpleval.models.team import Team

logger = logging.getLogger(__name__)


class DataIntegrityChecker:
    """Classe para verificar invariantes que atravessam várias tabelas"""

    def __init__(self, db: Session, snapshot_size: Optional[int] = None):
        self.db = db
        self.snapshot_size = snapshot_size or settings.MATCH_ROSTER_SIZE

    def validate_match(self, match: Match, participant_count: int) -> tuple[bool, Optional[str]]:
        """Valida integridade de uma partida"""
        if match.team_a_id == match.team_b_id:
            return False, "Time A e time B não podem ser o mesmo"

        if (match.team_a_maps_won is None) != (match.team_b_maps_won is None):
            return False, "Placar registrado pela metade"

        for score in (match.team_a_maps_won, match.team_b_maps_won):
            if score is not None and not 0 <= score <= settings.MATCH_MAX_MAPS_WON:
                return False, f"Mapas vencidos fora do intervalo 0-{settings.MATCH_MAX_MAPS_WON}"

        expected = 2 * self.snapshot_size
        if participant_count not in (0, expected):
            return False, f"Snapshot incompleto: {participant_count} participantes (esperado 0 ou {expected})"

        return True, None

    def validate_team(self, team: Team) -> tuple[bool, Optional[str]]:
        """Valida integridade de um time"""
        if not team.name or len(team.name.strip()) == 0:
            return False, "Nome do time é obrigatório"

        if not team.team_code or len(team.team_code.strip()) == 0:
            return False, "Código do time é obrigatório"

        return True, None

    def find_orphan_participants(self) -> list[tuple[int, int]]:
        """Linhas da relação cujo jogador ou partida não existe mais"""
        result = self.db.execute(
            select(MatchParticipant.match_id, MatchParticipant.player_id)
            .outerjoin(Player, Player.id == MatchParticipant.player_id)
            .outerjoin(Match, Match.id == MatchParticipant.match_id)
            .filter((Player.id.is_(None)) | (Match.id.is_(None)))
        )
        return [(row.match_id, row.player_id) for row in result]

    def check_data_consistency(self) -> Dict[str, Any]:
        """Verifica consistência geral dos dados no banco"""
        issues = []

        counts = dict(
            self.db.execute(
                select(MatchParticipant.match_id, func.count())
                .group_by(MatchParticipant.match_id)
            ).all()
        )

        for match in self.db.execute(select(Match)).scalars():
            valid, error = self.validate_match(match, counts.get(match.id, 0))
            if not valid:
                issues.append(f"Partida {match.id}: {error}")

        for team in self.db.execute(select(Team)).scalars():
            valid, error = self.validate_team(team)
            if not valid:
                issues.append(f"Time {team.id}: {error}")

        for match_id, player_id in self.find_orphan_participants():
            issues.append(f"Participante órfão: partida {match_id}, jogador {player_id}")

        if issues:
            logger.warning(f"Verificação de integridade encontrou {len(issues)} problemas")

        return {
            "timestamp": utcnow().isoformat(),
            "issues_found": len(issues),
            "issues": issues,
            "status": "ok" if len(issues) == 0 else "issues_found"
        }
