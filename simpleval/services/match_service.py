"""
Service de partidas.

Único ponto com permissão de escrita sobre Match e MatchParticipant.
Cada operação de escrita roda em um único escopo transacional: leitura
dos elencos, gravação da partida e gravação dos participantes são
confirmadas juntas ou desfeitas juntas.
"""
from datetime import datetime
from typing import Callable, List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from simpleval.core.clock import utcnow
from simpleval.core.database import transactional
from simpleval.core.exceptions import (
    ConflictError,
    ConsistencyError,
    NotFoundError,
    ValidationError,
)
from simpleval.models.match import Match
from simpleval.models.match_participant import MatchParticipant
from simpleval.models.player import Player
from simpleval.repositories.match_repository import MatchParticipantRepository, MatchRepository
from simpleval.repositories.player_repository import PlayerRepository
from simpleval.repositories.team_repository import TeamRepository
from simpleval.services.match_validator import MatchValidator, ProposedMatch, ValidationResult
from simpleval.services.roster_resolver import RosterResolver
import logging

logger = logging.getLogger(__name__)

TEAM_IDS_IMMUTABLE = "team ids cannot change"
_SCORE_FIELDS = ("team_a_maps_won", "team_b_maps_won")


class MatchService:
    """Orquestra criação, atualização e remoção de partidas"""

    def __init__(
        self,
        db: Session,
        validator: Optional[MatchValidator] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.clock = clock
        self.validator = validator or MatchValidator(clock=clock)
        self.roster_resolver = RosterResolver(db)
        self.matches = MatchRepository(db)
        self.participants = MatchParticipantRepository(db)
        self.players = PlayerRepository(db)
        self.teams = TeamRepository(db)

    @property
    def snapshot_size(self) -> int:
        """Jogadores gravados por lado no snapshot"""
        return self.validator.roster_size

    # ------------------------------------------------------------------
    # Leitura
    # ------------------------------------------------------------------

    def list_matches(self) -> List[Match]:
        """Lista todas as partidas"""
        return self.matches.get_all()

    def get_match(self, match_id: int, with_participants: bool = False) -> Match:
        """Obtém partida ou falha com NotFoundError"""
        match = self.matches.get_by_id(match_id, with_participants=with_participants)
        if not match:
            raise NotFoundError(f"Match {match_id} not found")
        return match

    def get_match_players(self, match: Match) -> List[Player]:
        """Jogadores do snapshot em ordem de ID (o time atual pode ter mudado)"""
        players = [p.player for p in match.participants if p.player is not None]
        return sorted(players, key=lambda p: p.id)

    def get_participant(self, match_id: int, player_id: int) -> MatchParticipant:
        """Obtém uma linha da relação ou falha com NotFoundError"""
        participant = self.participants.get(match_id, player_id)
        if not participant:
            raise NotFoundError(f"Player {player_id} is not linked to match {match_id}")
        return participant

    def list_participants(self, match_id: int) -> List[MatchParticipant]:
        """Linhas da relação de uma partida"""
        return self.participants.list_for_match(match_id)

    def validate(self, proposed: ProposedMatch) -> ValidationResult:
        """Valida sem gravar, resolvendo elencos quando há placar"""
        sizes = self._roster_sizes(proposed)
        return self.validator.validate(proposed, *sizes)

    # ------------------------------------------------------------------
    # Escrita
    # ------------------------------------------------------------------

    def create_match(self, data: dict) -> Match:
        """
        Cria partida.

        Com placar: grava a partida e o snapshot dos elencos (os primeiros
        N jogadores de cada time na ordem do RosterResolver). Sem placar:
        grava apenas a partida.
        """
        proposed = ProposedMatch(
            team_a_id=data["team_a_id"],
            team_b_id=data["team_b_id"],
            date=data["date"],
            team_a_maps_won=data.get("team_a_maps_won"),
            team_b_maps_won=data.get("team_b_maps_won"),
        )

        with transactional(self.db):
            rosters = self._resolve_rosters(proposed)
            self._check(proposed, rosters)
            self._ensure_teams_exist(proposed.team_a_id, proposed.team_b_id)

            match = self.matches.create({
                "team_a_id": proposed.team_a_id,
                "team_b_id": proposed.team_b_id,
                "date": proposed.date,
                "team_a_maps_won": proposed.team_a_maps_won,
                "team_b_maps_won": proposed.team_b_maps_won,
            })

            if proposed.has_score:
                self._snapshot(match, rosters)

        logger.info(
            f"Partida {match.id} criada: {match.team_a_id} vs {match.team_b_id} "
            f"({'com' if proposed.has_score else 'sem'} placar)"
        )
        return match

    def update_match(self, match_id: int, data: dict) -> Match:
        """
        Atualiza placar e/ou data.

        Os times vêm da linha gravada e não podem mudar. Campos ausentes
        mantêm o valor atual; placar null é apagado. Se o placar surge
        agora e a partida ainda não tem snapshot, o snapshot é gravado na
        mesma transação; se já tem, ConflictError.
        """
        with transactional(self.db):
            match = self.get_match(match_id)

            for key, current in (("team_a_id", match.team_a_id), ("team_b_id", match.team_b_id)):
                if data.get(key) is not None and data[key] != current:
                    raise ValidationError([TEAM_IDS_IMMUTABLE])

            had_score = match.has_score
            proposed = ProposedMatch(
                team_a_id=match.team_a_id,
                team_b_id=match.team_b_id,
                date=data["date"] if data.get("date") is not None else match.date,
                team_a_maps_won=data.get("team_a_maps_won", match.team_a_maps_won),
                team_b_maps_won=data.get("team_b_maps_won", match.team_b_maps_won),
            )

            rosters = self._resolve_rosters(proposed)
            self._check(proposed, rosters)

            needs_snapshot = proposed.has_score and not had_score
            if needs_snapshot and self.participants.count_for_match(match.id) > 0:
                raise ConflictError(
                    f"Match {match.id} already has a roster snapshot; clear it before recording a new one"
                )

            self.matches.update(match, {
                "date": proposed.date,
                "team_a_maps_won": proposed.team_a_maps_won,
                "team_b_maps_won": proposed.team_b_maps_won,
            })

            if needs_snapshot:
                self._snapshot(match, rosters)

        logger.info(f"Partida {match.id} atualizada")
        return match

    def delete_match(self, match_id: int) -> None:
        """Remove participantes e depois a partida, atomicamente"""
        with transactional(self.db):
            match = self.get_match(match_id)
            removed = self.participants.clear(match.id)

            if self.participants.count_for_match(match.id) != 0:
                raise ConsistencyError(f"Participant rows of match {match.id} survived deletion")

            self.db.expunge(match)
            self.matches.delete(match_id)

        logger.info(f"Partida {match_id} removida ({removed} participantes)")

    def add_participant(self, match_id: int, player_id: int) -> MatchParticipant:
        """Correção manual de elenco: sem checagem de tamanho"""
        with transactional(self.db):
            self.get_match(match_id)
            if not self.players.get_by_id(player_id):
                raise NotFoundError(f"Player {player_id} not found")
            if self.participants.get(match_id, player_id):
                raise ConflictError(f"Player {player_id} is already linked to match {match_id}")

            try:
                participant = self.participants.add(match_id, player_id)
            except IntegrityError as e:
                raise ConflictError(f"Player {player_id} is already linked to match {match_id}") from e

        logger.info(f"Jogador {player_id} adicionado à partida {match_id}")
        return participant

    def remove_participant(self, match_id: int, player_id: int) -> int:
        """Remoção idempotente de uma linha"""
        with transactional(self.db):
            removed = self.participants.remove(match_id, player_id)
        if removed:
            logger.info(f"Jogador {player_id} removido da partida {match_id}")
        return removed

    def clear_participants(self, match_id: int) -> int:
        """Remoção idempotente de todo o snapshot de uma partida"""
        with transactional(self.db):
            removed = self.participants.clear(match_id)
        logger.info(f"Snapshot da partida {match_id} limpo ({removed} linhas)")
        return removed

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _ensure_teams_exist(self, *team_ids: int) -> None:
        for team_id in dict.fromkeys(team_ids):
            if not self.teams.get_by_id(team_id):
                raise NotFoundError(f"Team {team_id} not found")

    def _resolve_rosters(self, proposed: ProposedMatch) -> Optional[Tuple[List[Player], List[Player]]]:
        if not proposed.has_score:
            return None
        return (
            self.roster_resolver.resolve_roster(proposed.team_a_id, for_update=True),
            self.roster_resolver.resolve_roster(proposed.team_b_id, for_update=True),
        )

    def _roster_sizes(self, proposed: ProposedMatch) -> Tuple[Optional[int], Optional[int]]:
        if not proposed.has_score:
            return None, None
        roster_a = self.roster_resolver.resolve_roster(proposed.team_a_id)
        roster_b = self.roster_resolver.resolve_roster(proposed.team_b_id)
        return len(roster_a), len(roster_b)

    def _check(self, proposed: ProposedMatch, rosters) -> ValidationResult:
        sizes = (len(rosters[0]), len(rosters[1])) if rosters else (None, None)
        result = self.validator.validate(proposed, *sizes)
        if not result.admissible:
            logger.info(f"Partida rejeitada: {result.reasons}")
            raise ValidationError(result.reasons)
        return result

    def _snapshot(self, match: Match, rosters) -> List[MatchParticipant]:
        roster_a, roster_b = rosters
        player_ids = [p.id for p in roster_a[:self.snapshot_size]]
        player_ids += [p.id for p in roster_b[:self.snapshot_size]]

        expected = 2 * self.snapshot_size
        if len(set(player_ids)) != expected:
            raise ConsistencyError(
                f"Roster snapshot for match {match.id} has {len(set(player_ids))} players, expected {expected}"
            )

        participants = self.participants.add_many(match.id, player_ids)
        if self.participants.count_for_match(match.id) != expected:
            raise ConsistencyError(f"Roster snapshot for match {match.id} is incomplete")
        return participants
