"""Service de Time"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List
from simpleval.core.database import transactional
from simpleval.core.exceptions import ConflictError, NotFoundError
from simpleval.models.team import Team
from simpleval.repositories.match_repository import MatchRepository
from simpleval.repositories.team_repository import TeamRepository
from simpleval.services.outcome import OutcomeResult, derive_outcome
import logging

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = {"logo", "record"}


class TeamService:
    """Service para operações com times"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = TeamRepository(db)
        self.matches = MatchRepository(db)

    def get_all_teams(self) -> List[Team]:
        """Obtém todos os times"""
        return self.repository.get_all()

    def get_team(self, team_id: int) -> Team:
        """Obtém time por ID"""
        team = self.repository.get_by_id(team_id)
        if not team:
            raise NotFoundError(f"Team {team_id} not found")
        return team

    def _ensure_code_free(self, team_code: str, team_id: int = None) -> None:
        existing = self.repository.get_by_code(team_code)
        if existing and existing.id != team_id:
            raise ConflictError(f"team_code '{team_code}' is already in use")

    def create_team(self, team_data: dict) -> Team:
        """Cria time com team_code único"""
        with transactional(self.db):
            self._ensure_code_free(team_data["team_code"])
            try:
                team = self.repository.create(team_data)
            except IntegrityError as e:
                raise ConflictError(f"team_code '{team_data['team_code']}' is already in use") from e
        logger.info(f"Time {team.id} ({team.team_code}) criado")
        return team

    def update_team(self, team_id: int, team_data: dict) -> Team:
        """Atualiza time"""
        team_data = {
            key: value for key, value in team_data.items()
            if value is not None or key in NULLABLE_FIELDS
        }
        with transactional(self.db):
            team = self.get_team(team_id)
            if team_data.get("team_code"):
                self._ensure_code_free(team_data["team_code"], team_id)
            team = self.repository.update(team, team_data)
        return team

    def delete_team(self, team_id: int) -> None:
        """Remove time que não é referenciado por partidas"""
        with transactional(self.db):
            team = self.get_team(team_id)
            if self.repository.count_matches(team_id):
                raise ConflictError(f"Team {team_id} is referenced by matches; archive it instead")
            self.repository.delete(team)
        logger.info(f"Time {team_id} removido")

    def get_record(self, team_id: int) -> dict:
        """Campanha V-D-E calculada a partir dos placares gravados"""
        self.get_team(team_id)
        wins = losses = draws = unscored = 0

        for match in self.matches.get_for_team(team_id):
            outcome = derive_outcome(match)
            if outcome.result == OutcomeResult.DRAW:
                draws += 1
            elif outcome.result == OutcomeResult.WINNER:
                if outcome.winner_team_id == team_id:
                    wins += 1
                else:
                    losses += 1
            else:
                unscored += 1

        record = f"{wins}-{losses}" if not draws else f"{wins}-{losses}-{draws}"
        return {
            "team_id": team_id,
            "wins": wins,
            "losses": losses,
            "draws": draws,
            "unscored": unscored,
            "record": record,
        }
