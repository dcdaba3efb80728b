"""Modelo Player"""
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from simpleval.models.base import BaseModel


class Player(BaseModel):
    """Modelo de Jogador"""
    __tablename__ = "players"

    in_game_name = Column(String(255), nullable=False)
    real_name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=True)
    country_name = Column(String(100), nullable=False)
    country_flag_code = Column(String(10), nullable=False)
    profile_picture = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="Active")

    # Referência fraca: jogador pode estar sem time
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True)

    # Relationships
    team = relationship("Team")

    def __repr__(self):
        return f"<Player(id={self.id}, in_game_name='{self.in_game_name}', team_id={self.team_id})>"
