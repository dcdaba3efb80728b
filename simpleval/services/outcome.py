"""
Derivação de resultado e estado de uma partida.

Funções puras: a mesma entrada sempre produz o mesmo resultado, e toda
tela ou relatório que precisa saber "quem venceu" passa por aqui.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol
from simpleval.core.clock import as_utc, utcnow


class OutcomeResult(str, Enum):
    DRAW = "draw"
    WINNER = "winner"
    UNSCORED = "unscored"
    UNKNOWN = "unknown"


class MatchState(str, Enum):
    """Estado derivado; não é gravado no banco"""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    AWAITING_RESULT = "awaiting_result"


class MatchLike(Protocol):
    team_a_id: int
    team_b_id: int
    team_a_maps_won: Optional[int]
    team_b_maps_won: Optional[int]
    date: datetime


@dataclass(frozen=True)
class MatchOutcome:
    result: OutcomeResult
    winner_team_id: Optional[int] = None

    @property
    def is_decided(self) -> bool:
        return self.result in (OutcomeResult.DRAW, OutcomeResult.WINNER)

    def to_dict(self) -> dict:
        return {"result": self.result.value, "winner_team_id": self.winner_team_id}


def outcome_from_scores(team_a_id: int, team_b_id: int, team_a_maps_won: int, team_b_maps_won: int) -> MatchOutcome:
    """Resultado de um placar completo: empate ou maior placar vence"""
    if team_a_maps_won == team_b_maps_won:
        return MatchOutcome(OutcomeResult.DRAW)
    if team_a_maps_won > team_b_maps_won:
        return MatchOutcome(OutcomeResult.WINNER, team_a_id)
    return MatchOutcome(OutcomeResult.WINNER, team_b_id)


def _is_past(date: Optional[datetime], now: Optional[datetime]) -> bool:
    if date is None:
        return False
    return as_utc(date) < as_utc(now or utcnow())


def derive_outcome(match: MatchLike, now: Optional[datetime] = None) -> MatchOutcome:
    """
    Mapeia o placar gravado para Draw / Winner / Unscored / Unknown.

    Sem placar e data ainda não passada: Unscored. Sem placar e data no
    passado: Unknown (deveria ter resultado). Placar pela metade é um
    estado inválido e também cai em Unknown.
    """
    a, b = match.team_a_maps_won, match.team_b_maps_won
    if a is not None and b is not None:
        return outcome_from_scores(match.team_a_id, match.team_b_id, a, b)
    if a is None and b is None and not _is_past(match.date, now):
        return MatchOutcome(OutcomeResult.UNSCORED)
    return MatchOutcome(OutcomeResult.UNKNOWN)


def derive_state(match: MatchLike, now: Optional[datetime] = None) -> MatchState:
    """Scheduled -> Completed é a única transição para frente"""
    if match.team_a_maps_won is not None and match.team_b_maps_won is not None:
        return MatchState.COMPLETED
    if _is_past(match.date, now):
        return MatchState.AWAITING_RESULT
    return MatchState.SCHEDULED
