"""Dados de apoio dos testes"""
from datetime import datetime, timedelta, timezone

from simpleval.models.player import Player
from simpleval.models.team import Team

PAST = datetime(2024, 6, 1, 18, 0, tzinfo=timezone.utc)


def tomorrow() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=1)


def make_team(session, name: str, team_code: str, region: str = "Americas", players: int = 5,
              status: str = "Active") -> Team:
    """Cria um time com N jogadores ativos"""
    team = Team(name=name, team_code=team_code, region=region, status=status)
    session.add(team)
    session.flush()
    for i in range(players):
        session.add(Player(
            in_game_name=f"{team_code.lower()}{i}",
            real_name=f"{name} Player {i}",
            role="Duelist",
            country_name="United States",
            country_flag_code="us",
            status="Active",
            team_id=team.id,
        ))
    session.commit()
    return team
