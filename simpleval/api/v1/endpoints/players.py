"""Endpoints de Jogadores"""
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from slowapi import Limiter
from slowapi.util import get_remote_address
from simpleval.ai.text_generator import TextGenerationUnavailable, TextGenerator, get_text_generator
from simpleval.core.database import get_db
from simpleval.schemas.ai import AIResponse
from simpleval.schemas.player import PlayerCreate, PlayerResponse, PlayerUpdate
from simpleval.services.player_service import PlayerService

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("", response_model=List[PlayerResponse])
def get_players(
    team_id: Optional[int] = Query(None, description="Filtrar por time"),
    db: Session = Depends(get_db)
):
    """Lista jogadores, opcionalmente de um time"""
    return PlayerService(db).get_players(team_id=team_id)


@router.get("/{player_id}", response_model=PlayerResponse)
def get_player(player_id: int, db: Session = Depends(get_db)):
    """Obtém um jogador por ID"""
    return PlayerService(db).get_player(player_id)


@router.get("/{player_id}/bio", response_model=AIResponse)
@limiter.limit("20/minute")
async def get_player_bio(
    request: Request,
    player_id: int,
    db: Session = Depends(get_db),
    generator: TextGenerator = Depends(get_text_generator),
):
    """Gera a bio do jogador a partir do cadastro e dos resultados"""
    prompt = PlayerService(db).build_bio_prompt(player_id)
    try:
        text, cached = await generator.generate(prompt)
    except TextGenerationUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return AIResponse(response=text, cached=cached)


@router.post("", response_model=PlayerResponse, status_code=201)
def create_player(payload: PlayerCreate, db: Session = Depends(get_db)):
    """Cria um jogador"""
    return PlayerService(db).create_player(payload.model_dump(mode="json"))


@router.put("/{player_id}", response_model=PlayerResponse)
def update_player(player_id: int, payload: PlayerUpdate, db: Session = Depends(get_db)):
    """Atualiza um jogador"""
    return PlayerService(db).update_player(player_id, payload.model_dump(mode="json", exclude_unset=True))


@router.delete("/{player_id}", status_code=204, response_class=Response)
def delete_player(player_id: int, db: Session = Depends(get_db)):
    """Remove um jogador"""
    PlayerService(db).delete_player(player_id)
    return Response(status_code=204)
