"""Schemas de Team"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from simpleval.models.enums import Region, RecordStatus


class TeamBase(BaseModel):
    """Schema base de Team"""
    name: str = Field(..., min_length=1)
    team_code: str = Field(..., min_length=1, max_length=20)
    region: Region
    status: RecordStatus = RecordStatus.ACTIVE
    logo: Optional[str] = None
    record: Optional[str] = None


class TeamCreate(TeamBase):
    """Schema para criação de Team"""


class TeamUpdate(BaseModel):
    """Schema para atualização de Team"""
    name: Optional[str] = Field(None, min_length=1)
    team_code: Optional[str] = Field(None, min_length=1, max_length=20)
    region: Optional[Region] = None
    status: Optional[RecordStatus] = None
    logo: Optional[str] = None
    record: Optional[str] = None


class TeamResponse(TeamBase):
    """Schema de resposta de Team"""
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TeamRecordResponse(BaseModel):
    """Campanha do time derivada dos placares"""
    team_id: int
    wins: int
    losses: int
    draws: int
    unscored: int
    record: str
