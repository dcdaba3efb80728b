"""Schemas de MatchParticipant"""
from pydantic import BaseModel, ConfigDict


class MatchParticipantCreate(BaseModel):
    """Schema para adicionar participante"""
    match_id: int
    player_id: int


class MatchParticipantResponse(BaseModel):
    """Schema de resposta de participante"""
    match_id: int
    player_id: int

    model_config = ConfigDict(from_attributes=True)
