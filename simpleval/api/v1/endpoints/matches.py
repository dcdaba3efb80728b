"""Endpoints de Partidas"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from simpleval.core.database import get_db
from simpleval.core.exceptions import NotFoundError, error_response
from simpleval.models.match import Match
from simpleval.schemas.match import (
    MatchCreate,
    MatchDetailResponse,
    MatchResponse,
    MatchUpdate,
    OutcomeResponse,
    ValidationReport,
)
from simpleval.schemas.player import PlayerResponse
from simpleval.services.match_service import MatchService
from simpleval.services.match_validator import ProposedMatch
from simpleval.services.outcome import derive_outcome, derive_state

router = APIRouter()


def to_match_response(match: Match, players: Optional[list] = None):
    """Serializa partida com estado e resultado derivados"""
    data = {
        "id": match.id,
        "team_a_id": match.team_a_id,
        "team_b_id": match.team_b_id,
        "team_a_maps_won": match.team_a_maps_won,
        "team_b_maps_won": match.team_b_maps_won,
        "date": match.date,
        "state": derive_state(match).value,
        "outcome": OutcomeResponse(**derive_outcome(match).to_dict()),
    }
    if players is None:
        return MatchResponse(**data)
    return MatchDetailResponse(
        **data,
        players=[PlayerResponse.model_validate(p) for p in players],
    )


@router.get("", response_model=List[MatchResponse])
def list_matches(db: Session = Depends(get_db)):
    """Lista todas as partidas"""
    service = MatchService(db)
    return [to_match_response(m) for m in service.list_matches()]


@router.post("/validate", response_model=ValidationReport)
def validate_match(payload: MatchCreate, db: Session = Depends(get_db)):
    """Roda as regras de partida sem gravar nada"""
    service = MatchService(db)
    result = service.validate(ProposedMatch(**payload.model_dump()))
    return ValidationReport(
        admissible=result.admissible,
        classification=result.classification.value,
        reasons=result.reasons,
        outcome=OutcomeResponse(**result.outcome.to_dict()) if result.outcome else None,
    )


@router.get("/{match_id}", response_model=MatchDetailResponse)
def get_match(match_id: int, db: Session = Depends(get_db)):
    """Obtém uma partida com seus participantes"""
    service = MatchService(db)
    match = service.get_match(match_id, with_participants=True)
    return to_match_response(match, players=service.get_match_players(match))


@router.post("", response_model=MatchDetailResponse, status_code=201)
def create_match(payload: MatchCreate, db: Session = Depends(get_db)):
    """Cria partida (e o snapshot de elencos quando há placar)"""
    service = MatchService(db)
    try:
        match = service.create_match(payload.model_dump())
    except NotFoundError as exc:
        # time inexistente é erro de entrada nesta rota
        return error_response(exc, status_code=400)
    match = service.get_match(match.id, with_participants=True)
    return to_match_response(match, players=service.get_match_players(match))


@router.put("/{match_id}", response_model=MatchDetailResponse)
def update_match(match_id: int, payload: MatchUpdate, db: Session = Depends(get_db)):
    """Atualiza placar e/ou data de uma partida"""
    service = MatchService(db)
    match = service.update_match(match_id, payload.model_dump(exclude_unset=True))
    match = service.get_match(match.id, with_participants=True)
    return to_match_response(match, players=service.get_match_players(match))


@router.delete("/{match_id}", status_code=204, response_class=Response)
def delete_match(match_id: int, db: Session = Depends(get_db)):
    """Remove partida e seus participantes"""
    MatchService(db).delete_match(match_id)
    return Response(status_code=204)
