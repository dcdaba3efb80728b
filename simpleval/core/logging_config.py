"""Configuração de logging"""
import logging
import sys
from pathlib import Path
from typing import Optional
from simpleval.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Bibliotecas que só interessam em nível WARNING
NOISY_LOGGERS = (
    "uvicorn.access",
    "sqlalchemy.engine",
    "httpx",
    "openai",
    "langchain",
)


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """Configura logging da aplicação (stdout e, fora de debug, arquivo)"""
    handlers = [logging.StreamHandler(sys.stdout)]

    if not settings.DEBUG:
        log_path = Path(log_file or settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper()),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configurado ({settings.ENVIRONMENT})")
    return logger
