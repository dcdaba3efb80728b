"""Modelo Team"""
from sqlalchemy import Column, String, Text, UniqueConstraint
from simpleval.models.base import BaseModel


class Team(BaseModel):
    """Modelo de Time"""
    __tablename__ = "teams"

    name = Column(String(255), nullable=False)
    team_code = Column(String(20), nullable=False)
    region = Column(String(20), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="Active")
    logo = Column(Text, nullable=True)
    record = Column(String(50), nullable=True)

    __table_args__ = (
        UniqueConstraint('team_code', name='uq_team_code'),
    )

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}', team_code='{self.team_code}')>"
