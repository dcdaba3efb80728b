"""Endpoints de Times"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List
from simpleval.core.database import get_db
from simpleval.schemas.team import TeamCreate, TeamRecordResponse, TeamResponse, TeamUpdate
from simpleval.services.team_service import TeamService

router = APIRouter()


@router.get("", response_model=List[TeamResponse])
def get_teams(db: Session = Depends(get_db)):
    """Lista todos os times"""
    return TeamService(db).get_all_teams()


@router.get("/{team_id}", response_model=TeamResponse)
def get_team(team_id: int, db: Session = Depends(get_db)):
    """Obtém um time por ID"""
    return TeamService(db).get_team(team_id)


@router.get("/{team_id}/record", response_model=TeamRecordResponse)
def get_team_record(team_id: int, db: Session = Depends(get_db)):
    """Campanha do time calculada a partir dos resultados"""
    return TeamService(db).get_record(team_id)


@router.post("", response_model=TeamResponse, status_code=201)
def create_team(payload: TeamCreate, db: Session = Depends(get_db)):
    """Cria um time"""
    return TeamService(db).create_team(payload.model_dump(mode="json"))


@router.put("/{team_id}", response_model=TeamResponse)
def update_team(team_id: int, payload: TeamUpdate, db: Session = Depends(get_db)):
    """Atualiza um time"""
    return TeamService(db).update_team(team_id, payload.model_dump(mode="json", exclude_unset=True))


@router.delete("/{team_id}", status_code=204, response_class=Response)
def delete_team(team_id: int, db: Session = Depends(get_db)):
    """Remove um time"""
    TeamService(db).delete_team(team_id)
    return Response(status_code=204)
