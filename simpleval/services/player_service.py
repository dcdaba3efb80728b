"""Service de Jogador"""
from sqlalchemy.orm import Session
from typing import List, Optional
from simpleval.core.database import transactional
from simpleval.core.exceptions import ConflictError, NotFoundError
from simpleval.models.player import Player
from simpleval.repositories.match_repository import MatchParticipantRepository, MatchRepository
from simpleval.repositories.player_repository import PlayerRepository
from simpleval.repositories.team_repository import TeamRepository
from simpleval.services.outcome import OutcomeResult, derive_outcome
import logging

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = {"role", "profile_picture", "team_id"}


class PlayerService:
    """Service para operações com jogadores"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = PlayerRepository(db)
        self.teams = TeamRepository(db)
        self.matches = MatchRepository(db)
        self.participants = MatchParticipantRepository(db)

    def get_players(self, team_id: Optional[int] = None) -> List[Player]:
        """Lista jogadores, opcionalmente de um time"""
        return self.repository.get_all(team_id=team_id)

    def get_player(self, player_id: int) -> Player:
        """Obtém jogador por ID"""
        player = self.repository.get_by_id(player_id)
        if not player:
            raise NotFoundError(f"Player {player_id} not found")
        return player

    def _ensure_team(self, team_id: Optional[int]) -> None:
        if team_id is not None and not self.teams.get_by_id(team_id):
            raise NotFoundError(f"Team {team_id} not found")

    def create_player(self, player_data: dict) -> Player:
        """Cria jogador"""
        with transactional(self.db):
            self._ensure_team(player_data.get("team_id"))
            player = self.repository.create(player_data)
        logger.info(f"Jogador {player.id} ({player.in_game_name}) criado")
        return player

    def update_player(self, player_id: int, player_data: dict) -> Player:
        """Atualiza jogador; trocar de time não altera snapshots antigos"""
        player_data = {
            key: value for key, value in player_data.items()
            if value is not None or key in NULLABLE_FIELDS
        }
        with transactional(self.db):
            player = self.get_player(player_id)
            if "team_id" in player_data:
                self._ensure_team(player_data["team_id"])
            player = self.repository.update(player, player_data)
        return player

    def delete_player(self, player_id: int) -> None:
        """Remove jogador que não aparece em nenhum snapshot de partida"""
        with transactional(self.db):
            player = self.get_player(player_id)
            if self.repository.count_participations(player_id):
                raise ConflictError(
                    f"Player {player_id} is part of match rosters; archive the player instead"
                )
            self.repository.delete(player)
        logger.info(f"Jogador {player_id} removido")

    def build_bio_prompt(self, player_id: int) -> str:
        """Monta o prompt de bio a partir do cadastro e das partidas disputadas"""
        player = self.get_player(player_id)
        team = self.teams.get_by_id(player.team_id) if player.team_id else None

        lines = [
            f"Write a short esports biography for the VALORANT player {player.in_game_name} "
            f"({player.real_name}) from {player.country_name}.",
        ]
        if player.role:
            lines.append(f"Role: {player.role}.")
        if team:
            lines.append(f"Current team: {team.name} ({team.team_code}, {team.region}).")
        else:
            lines.append("Currently without a team.")

        results = []
        for participation in self.participants.list_for_player(player_id):
            match = self.matches.get_by_id(participation.match_id)
            if match is None:
                continue
            outcome = derive_outcome(match)
            if not outcome.is_decided:
                continue
            # o time atual não indica o lado em que o jogador jogou
            team_a = self.teams.get_by_id(match.team_a_id)
            team_b = self.teams.get_by_id(match.team_b_id)
            name_a = team_a.name if team_a else f"team {match.team_a_id}"
            name_b = team_b.name if team_b else f"team {match.team_b_id}"
            line = f"{name_a} {match.team_a_maps_won}-{match.team_b_maps_won} {name_b}"
            if outcome.result == OutcomeResult.DRAW:
                results.append(f"{line} (draw)")
            else:
                winner = name_a if outcome.winner_team_id == match.team_a_id else name_b
                results.append(f"{line} (winner {winner})")

        if results:
            lines.append(f"Recorded matches: {'; '.join(results)}.")
        lines.append("Only use the facts above. Keep it under 120 words.")
        return " ".join(lines)
