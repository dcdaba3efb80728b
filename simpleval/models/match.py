"""Modelo Match"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from simpleval.models.base import BaseModel


class Match(BaseModel):
    """Modelo de Partida"""
    __tablename__ = "matches"

    team_a_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    team_b_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)

    # Placar em mapas: ambos definidos ou ambos nulos
    team_a_maps_won = Column(Integer, nullable=True)
    team_b_maps_won = Column(Integer, nullable=True)

    date = Column(DateTime(timezone=True), nullable=False, index=True)

    # Relationships
    team_a = relationship("Team", foreign_keys=[team_a_id])
    team_b = relationship("Team", foreign_keys=[team_b_id])
    participants = relationship(
        "MatchParticipant",
        back_populates="match",
        passive_deletes=True,
        order_by="MatchParticipant.player_id",
    )

    __table_args__ = (
        CheckConstraint('team_a_id <> team_b_id', name='ck_match_distinct_teams'),
        CheckConstraint(
            '(team_a_maps_won IS NULL) = (team_b_maps_won IS NULL)',
            name='ck_match_score_pair',
        ),
    )

    @property
    def has_score(self) -> bool:
        return self.team_a_maps_won is not None and self.team_b_maps_won is not None

    def __repr__(self):
        return (
            f"<Match(id={self.id}, team_a_id={self.team_a_id}, team_b_id={self.team_b_id}, "
            f"score={self.team_a_maps_won}-{self.team_b_maps_won})>"
        )
