"""Configuração do banco de dados e escopo transacional"""
from contextlib import contextmanager
from typing import Iterator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from simpleval.core.config import settings
from simpleval.core.exceptions import StoreError
import logging

logger = logging.getLogger(__name__)

# Base para modelos SQLAlchemy
Base = declarative_base()


def get_database_url() -> str:
    """Normaliza a URL para o driver psycopg2"""
    url = settings.database_url
    if url.startswith("postgresql+asyncpg://"):
        return url.replace("postgresql+asyncpg://", "postgresql+psycopg2://")
    elif url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://")
    return url


def build_engine(url: str, **kwargs) -> Engine:
    """Cria engine com opções adequadas ao dialeto"""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        new_engine = create_engine(url, echo=settings.DEBUG, **kwargs)
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
        return new_engine

    return create_engine(
        url,
        pool_size=10,
        max_overflow=5,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=settings.DEBUG,
        **kwargs,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite só aplica FKs/ON DELETE com o pragma ligado
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(get_database_url())

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    class_=Session,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


def get_db() -> Iterator[Session]:
    """
    Dependency para obter sessão do banco de dados.
    Uso: db: Session = Depends(get_db)

    Escritas são confirmadas pelos services via transactional();
    aqui só garantimos rollback e fechamento.
    """
    session = SessionLocal()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def transactional(session: Session) -> Iterator[Session]:
    """
    Escopo transacional: todas as escritas dentro do bloco são
    confirmadas juntas ou desfeitas juntas.
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Falha de persistência, transação desfeita: {e}")
        raise StoreError(str(e)) from e
    except Exception:
        session.rollback()
        raise


def init_db(bind: Engine = None):
    """Inicializa o banco de dados criando todas as tabelas"""
    import simpleval.models  # noqa: F401  registra os modelos no metadata

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Banco de dados inicializado")


def close_db():
    """Fecha todas as conexões do banco"""
    engine.dispose()
    logger.info("Conexões do banco de dados fechadas")
