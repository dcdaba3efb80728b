"""Endpoint de geração de texto"""
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from simpleval.ai.text_generator import TextGenerationUnavailable, TextGenerator, get_text_generator
from simpleval.schemas.ai import AIResponse
import logging

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/ai-response", response_model=AIResponse)
@limiter.limit("20/minute")
async def ai_response(
    request: Request,
    prompt: str = Query(..., min_length=1, max_length=4000),
    generator: TextGenerator = Depends(get_text_generator),
):
    """Gera texto livre a partir de um prompt montado pelo cliente"""
    try:
        text, cached = await generator.generate(prompt)
    except TextGenerationUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error(f"Erro ao gerar texto: {e}", exc_info=True)
        raise HTTPException(status_code=502, detail="text generation failed")
    return AIResponse(response=text, cached=cached)
