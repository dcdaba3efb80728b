"""Geração de texto livre (bio de jogador) via LLM"""
from functools import lru_cache
from typing import Optional
import logging
from langchain_openai import ChatOpenAI
from langchain_core.messages import HumanMessage, SystemMessage
from simpleval.core.cache import CacheManager, cache, make_key
from simpleval.core.config import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You write concise, factual texts about VALORANT esports teams and players. "
    "Use only the facts given in the request and never invent results."
)


class TextGenerationUnavailable(RuntimeError):
    """Nenhuma API key de LLM configurada"""


class TextGenerator:
    """Gera texto a partir de um prompt, com cache por prompt"""

    def __init__(self, llm=None, cache_manager: Optional[CacheManager] = None):
        self.llm = llm if llm is not None else self._initialize_llm()
        self.cache = cache_manager or cache

    def _initialize_llm(self):
        """Inicializa LLM, priorizando DeepSeek e caindo para OpenAI"""
        if settings.DEEPSEEK_API_KEY:
            base_url = settings.DEEPSEEK_BASE_URL or "https://api.deepseek.com/v1"
            if not base_url.endswith("/v1"):
                base_url = base_url.rstrip("/") + "/v1"
            logger.info(f"Gerador de texto com DeepSeek (modelo: {settings.CHATBOT_MODEL})")
            return ChatOpenAI(
                model=settings.CHATBOT_MODEL or "deepseek-chat",
                temperature=settings.CHATBOT_TEMPERATURE,
                api_key=settings.DEEPSEEK_API_KEY,
                base_url=base_url,
            )

        if settings.OPENAI_API_KEY:
            logger.info("Gerador de texto com OpenAI (fallback)")
            return ChatOpenAI(
                model="gpt-4o-mini",
                temperature=settings.CHATBOT_TEMPERATURE,
                api_key=settings.OPENAI_API_KEY,
            )

        logger.warning("Nenhuma API key configurada (DEEPSEEK_API_KEY ou OPENAI_API_KEY)")
        return None

    @property
    def available(self) -> bool:
        return self.llm is not None

    async def generate(self, prompt: str) -> tuple[str, bool]:
        """Retorna (texto, veio_do_cache)"""
        cache_key = make_key("ai-response", prompt)
        cached_text = await self.cache.get(cache_key)
        if cached_text is not None:
            logger.debug(f"Cache hit: {cache_key}")
            return cached_text, True

        if not self.available:
            raise TextGenerationUnavailable("text generation is not configured")

        messages = [SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=prompt)]
        response = await self.llm.ainvoke(messages)
        text = response.content.strip()

        await self.cache.set(cache_key, text)
        return text, False


@lru_cache
def get_text_generator() -> TextGenerator:
    """Dependency com instância única do gerador"""
    return TextGenerator()
