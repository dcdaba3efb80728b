"""Models - modelos SQLAlchemy"""
from simpleval.models.team import Team
from simpleval.models.player import Player
from simpleval.models.match import Match
from simpleval.models.match_participant import MatchParticipant
from simpleval.models.enums import Region, RecordStatus, PlayerRole

__all__ = [
    "Team",
    "Player",
    "Match",
    "MatchParticipant",
    "Region",
    "RecordStatus",
    "PlayerRole",
]
