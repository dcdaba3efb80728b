"""Modelo MatchParticipant"""
from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from simpleval.core.database import Base


class MatchParticipant(Base):
    """Relação N:N entre partida e jogador (snapshot do elenco)"""
    __tablename__ = "match_players"

    match_id = Column(Integer, ForeignKey("matches.id", ondelete="CASCADE"), primary_key=True)
    player_id = Column(Integer, ForeignKey("players.id"), primary_key=True, index=True)

    # Relationships
    match = relationship("Match", back_populates="participants")
    player = relationship("Player")

    def __repr__(self):
        return f"<MatchParticipant(match_id={self.match_id}, player_id={self.player_id})>"
