"""Router principal da API v1"""
from fastapi import APIRouter
from simpleval.api.v1.endpoints import matches, match_players, teams, players, ai, data_integrity

api_router = APIRouter()

api_router.include_router(matches.router, prefix="/matches", tags=["matches"])
api_router.include_router(match_players.router, prefix="/match_players", tags=["match-players"])
api_router.include_router(teams.router, prefix="/teams", tags=["teams"])
api_router.include_router(players.router, prefix="/players", tags=["players"])
api_router.include_router(ai.router, prefix="/api", tags=["ai"])
api_router.include_router(data_integrity.router, prefix="/data-integrity", tags=["data-integrity"])
