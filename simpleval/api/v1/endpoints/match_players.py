"""Endpoints da relação partida-jogador"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List
from simpleval.core.database import get_db
from simpleval.core.exceptions import NotFoundError, error_response
from simpleval.schemas.match_participant import MatchParticipantCreate, MatchParticipantResponse
from simpleval.services.match_service import MatchService

router = APIRouter()


@router.get("/{match_id}", response_model=List[MatchParticipantResponse])
def list_match_players(match_id: int, db: Session = Depends(get_db)):
    """Lista as linhas da relação de uma partida"""
    return MatchService(db).list_participants(match_id)


@router.get("/{match_id}/{player_id}", response_model=MatchParticipantResponse)
def get_match_player(match_id: int, player_id: int, db: Session = Depends(get_db)):
    """Obtém uma linha da relação"""
    return MatchService(db).get_participant(match_id, player_id)


@router.post("", response_model=MatchParticipantResponse, status_code=201)
def add_match_player(payload: MatchParticipantCreate, db: Session = Depends(get_db)):
    """Adiciona participante manualmente (sem checar tamanho do elenco)"""
    service = MatchService(db)
    try:
        return service.add_participant(payload.match_id, payload.player_id)
    except NotFoundError as exc:
        return error_response(exc, status_code=400)


@router.delete("/{match_id}", status_code=204, response_class=Response)
def clear_match_players(match_id: int, db: Session = Depends(get_db)):
    """Remove todos os participantes de uma partida (idempotente)"""
    MatchService(db).clear_participants(match_id)
    return Response(status_code=204)


@router.delete("/{match_id}/{player_id}", status_code=204, response_class=Response)
def remove_match_player(match_id: int, player_id: int, db: Session = Depends(get_db)):
    """Remove um participante (idempotente)"""
    MatchService(db).remove_participant(match_id, player_id)
    return Response(status_code=204)
