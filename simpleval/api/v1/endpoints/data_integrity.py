"""Endpoint de verificação de integridade de dados"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from simpleval.core.database import get_db
from simpleval.core.data_integrity import DataIntegrityChecker

router = APIRouter()


@router.get("/check")
def check_data_integrity(db: Session = Depends(get_db)):
    """Verifica integridade dos dados no banco"""
    checker = DataIntegrityChecker(db)
    return checker.check_data_consistency()
