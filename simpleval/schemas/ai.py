"""Schemas de geração de texto"""
from pydantic import BaseModel


class AIResponse(BaseModel):
    """Texto gerado a partir de um prompt"""
    response: str
    cached: bool = False
