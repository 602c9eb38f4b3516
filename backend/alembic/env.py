"""
Configuração do ambiente do Alembic para migrações.
"""
from logging.config import fileConfig
from sqlalchemy import engine_from_config
from sqlalchemy import pool
from alembic import context
import os
import sys

# Adiciona o diretório backend ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Importa os modelos para o Alembic detectá-los
from sqlmodel import SQLModel
from gestao_leitos.models import (  # noqa: F401
    Setor,
    Quarto,
    Leito,
    Paciente,
    Infeccao,
    HistoricoRegulacao,
    LogAuditoria,
)
from gestao_leitos.config import settings

# Configuração do Alembic
config = context.config

# Logging a partir do alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Metadata dos modelos para autogenerate
target_metadata = SQLModel.metadata

# URL do banco de dados
def get_url():
    return settings.DATABASE_URL


def run_migrations_offline() -> None:
    """
    Executa as migrações em modo offline (gera o SQL sem conectar).
    """
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Executa as migrações conectado ao banco.
    """
    configuration = config.get_section(config.config_ini_section)
    configuration["sqlalchemy.url"] = get_url()
    
    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
            # SQLite exige batch mode para ALTER TABLE
            render_as_batch=True if "sqlite" in get_url() else False,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
