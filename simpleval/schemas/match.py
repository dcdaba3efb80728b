"""Schemas de Match"""
from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from datetime import datetime
from simpleval.schemas.player import PlayerResponse


class MatchCreate(BaseModel):
    """Schema para criação de Match"""
    team_a_id: int
    team_b_id: int
    date: datetime
    team_a_maps_won: Optional[int] = None
    team_b_maps_won: Optional[int] = None


class MatchUpdate(BaseModel):
    """
    Schema para atualização de Match.

    Campos omitidos mantêm o valor gravado; placar enviado como null
    é apagado. Os ids dos times só são aceitos se forem os atuais.
    """
    team_a_id: Optional[int] = None
    team_b_id: Optional[int] = None
    date: Optional[datetime] = None
    team_a_maps_won: Optional[int] = None
    team_b_maps_won: Optional[int] = None


class OutcomeResponse(BaseModel):
    """Resultado derivado do placar"""
    result: str
    winner_team_id: Optional[int] = None


class MatchResponse(BaseModel):
    """Schema de resposta de Match"""
    id: int
    team_a_id: int
    team_b_id: int
    team_a_maps_won: Optional[int] = None
    team_b_maps_won: Optional[int] = None
    date: datetime
    state: str
    outcome: OutcomeResponse

    model_config = ConfigDict(from_attributes=True)


class MatchDetailResponse(MatchResponse):
    """Partida com o snapshot de jogadores"""
    players: List[PlayerResponse] = []


class ValidationReport(BaseModel):
    """Resultado de POST /matches/validate"""
    admissible: bool
    classification: str
    reasons: List[str]
    outcome: Optional[OutcomeResponse] = None
