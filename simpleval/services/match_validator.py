"""
Validação de partidas.

Um único conjunto de regras para agendar uma partida e para registrar
seu resultado. Todas as violações são coletadas (sem parar na primeira)
para que o chamador possa exibir tudo de uma vez.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional
from simpleval.core.clock import as_utc, utcnow
from simpleval.core.config import settings
from simpleval.services.outcome import MatchOutcome, outcome_from_scores

TEAMS_MUST_DIFFER = "teams must differ"
SCORE_INCOMPLETE = "score must be fully specified or absent"
FUTURE_RESULT = "cannot record a result for a future match"

ROSTER_RULE_EXACT = "exact"
ROSTER_RULE_AT_LEAST = "at_least"

_NUMBER_WORDS = {
    1: "one", 2: "two", 3: "three", 4: "four", 5: "five",
    6: "six", 7: "seven", 8: "eight", 9: "nine", 10: "ten",
}


class MatchClassification(str, Enum):
    UNSCORED = "unscored"
    SCORED = "scored"
    REJECTED = "rejected"


@dataclass
class ProposedMatch:
    """Estado proposto de uma partida (criação ou atualização)"""
    team_a_id: int
    team_b_id: int
    date: datetime
    team_a_maps_won: Optional[int] = None
    team_b_maps_won: Optional[int] = None

    @property
    def has_score(self) -> bool:
        return self.team_a_maps_won is not None and self.team_b_maps_won is not None

    @property
    def has_partial_score(self) -> bool:
        return (self.team_a_maps_won is None) != (self.team_b_maps_won is None)


@dataclass
class ValidationResult:
    classification: MatchClassification
    reasons: List[str] = field(default_factory=list)
    outcome: Optional[MatchOutcome] = None

    @property
    def admissible(self) -> bool:
        return self.classification != MatchClassification.REJECTED


def roster_size_message(required: int, rule: str) -> str:
    count = _NUMBER_WORDS.get(required, str(required))
    qualifier = "exactly" if rule == ROSTER_RULE_EXACT else "at least"
    return f"each team must have {qualifier} {count} players to record a result"


class MatchValidator:
    """Regras de admissão de partida, configuráveis via settings"""

    def __init__(
        self,
        roster_size: Optional[int] = None,
        roster_rule: Optional[str] = None,
        max_maps_won: Optional[int] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.roster_size = settings.MATCH_ROSTER_SIZE if roster_size is None else roster_size
        self.roster_rule = roster_rule or settings.MATCH_ROSTER_RULE
        self.max_maps_won = settings.MATCH_MAX_MAPS_WON if max_maps_won is None else max_maps_won
        self.clock = clock

        if self.roster_rule not in (ROSTER_RULE_EXACT, ROSTER_RULE_AT_LEAST):
            raise ValueError(f"Regra de elenco inválida: {self.roster_rule}")

    def _roster_ok(self, size: Optional[int]) -> bool:
        size = size or 0
        if self.roster_rule == ROSTER_RULE_EXACT:
            return size == self.roster_size
        return size >= self.roster_size

    def validate(
        self,
        proposed: ProposedMatch,
        roster_size_a: Optional[int] = None,
        roster_size_b: Optional[int] = None,
    ) -> ValidationResult:
        """Aplica todas as regras e classifica a partida proposta"""
        reasons: List[str] = []

        if proposed.team_a_id == proposed.team_b_id:
            reasons.append(TEAMS_MUST_DIFFER)

        if proposed.has_partial_score:
            reasons.append(SCORE_INCOMPLETE)

        for score in (proposed.team_a_maps_won, proposed.team_b_maps_won):
            if score is not None and not 0 <= score <= self.max_maps_won:
                reasons.append(f"maps won must be between 0 and {self.max_maps_won}")
                break

        if proposed.has_score:
            if as_utc(proposed.date) > as_utc(self.clock()):
                reasons.append(FUTURE_RESULT)

            # Elenco só importa quando há resultado a registrar
            if not (self._roster_ok(roster_size_a) and self._roster_ok(roster_size_b)):
                reasons.append(roster_size_message(self.roster_size, self.roster_rule))

        if reasons:
            return ValidationResult(MatchClassification.REJECTED, reasons)

        if not proposed.has_score:
            return ValidationResult(MatchClassification.UNSCORED)

        return ValidationResult(
            MatchClassification.SCORED,
            outcome=outcome_from_scores(
                proposed.team_a_id,
                proposed.team_b_id,
                proposed.team_a_maps_won,
                proposed.team_b_maps_won,
            ),
        )
