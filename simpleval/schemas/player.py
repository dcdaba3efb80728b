"""Schemas de Player"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from simpleval.models.enums import PlayerRole, RecordStatus


class PlayerBase(BaseModel):
    """Schema base de Player"""
    in_game_name: str = Field(..., min_length=1)
    real_name: str = Field(..., min_length=1)
    role: Optional[PlayerRole] = None
    country_name: str = Field(..., min_length=1)
    country_flag_code: str = Field(..., min_length=1, max_length=10)
    profile_picture: Optional[str] = None
    status: RecordStatus = RecordStatus.ACTIVE
    team_id: Optional[int] = None


class PlayerCreate(PlayerBase):
    """Schema para criação de Player"""


class PlayerUpdate(BaseModel):
    """Schema para atualização de Player"""
    in_game_name: Optional[str] = Field(None, min_length=1)
    real_name: Optional[str] = Field(None, min_length=1)
    role: Optional[PlayerRole] = None
    country_name: Optional[str] = Field(None, min_length=1)
    country_flag_code: Optional[str] = Field(None, min_length=1, max_length=10)
    profile_picture: Optional[str] = None
    status: Optional[RecordStatus] = None
    team_id: Optional[int] = None


class PlayerResponse(PlayerBase):
    """Schema de resposta de Player"""
    id: int

    model_config = ConfigDict(from_attributes=True)
