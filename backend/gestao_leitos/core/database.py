"""
Configuração do Banco de Dados.
Gestão de conexões e sessões SQLModel.
"""
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from typing import Generator
import logging

from gestao_leitos.config import settings

logger = logging.getLogger("gestao_leitos.database")


# Engine com configuração conforme o tipo de banco
connect_args = {}
if "sqlite" in settings.DATABASE_URL:
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    connect_args=connect_args
)


def create_db_and_tables() -> None:
    """
    Cria todas as tabelas no banco de dados.
    Chamada no início da aplicação.
    """
    # Importa os modelos para registrá-los no metadata
    import gestao_leitos.models  # noqa: F401
    
    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    """
    Gerador de sessões para injeção de dependência no FastAPI.
    
    Uso:
        @app.get("/endpoint")
        def endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session


def verificar_banco(session: Session) -> dict:
    """
    Verifica a conexão com o banco executando uma consulta trivial.
    
    Returns:
        {"status": "healthy"} ou {"status": "unhealthy", "error": ...}
    """
    try:
        session.connection().execute(text("SELECT 1"))
        return {"status": "healthy"}
    except SQLAlchemyError as e:
        logger.error(f"Banco de dados indisponível: {e}")
        return {"status": "unhealthy", "error": str(e)}
