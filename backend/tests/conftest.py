"""
Fixtures de pytest para os testes.
"""
import os

# Engine global da aplicação em memória durante os testes
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

from gestao_leitos.core.database import get_session
from main import app


# Engine para testes (SQLite em memória)
@pytest.fixture(name="engine")
def engine_fixture():
    """Cria um engine de teste em memória."""
    import gestao_leitos.models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Cria uma sessão de teste."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session):
    """Cria um cliente de teste com a sessão injetada."""
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


# Fixtures de dados de teste

@pytest.fixture
def criar_setor(session):
    """Factory fixture para criar setores."""
    from gestao_leitos.models.setor import Setor
    from gestao_leitos.models.enums import TipoSetorEnum

    def _criar_setor(nome_setor="Enfermaria Clínica", tipo_setor=TipoSetorEnum.ENFERMARIA.value, sigla_setor=None):
        setor = Setor(nome_setor=nome_setor, tipo_setor=tipo_setor, sigla_setor=sigla_setor)
        session.add(setor)
        session.commit()
        session.refresh(setor)
        return setor

    return _criar_setor


@pytest.fixture
def criar_quarto(session):
    """Factory fixture para criar quartos com lista explícita de leitos."""
    from gestao_leitos.models.quarto import Quarto

    def _criar_quarto(setor_id, nome_quarto="Box 1", leitos_ids=None):
        quarto = Quarto(nome_quarto=nome_quarto, setor_id=setor_id, leitos_ids=list(leitos_ids or []))
        session.add(quarto)
        session.commit()
        session.refresh(quarto)
        return quarto

    return _criar_quarto


@pytest.fixture
def criar_leito(session):
    """Factory fixture para criar leitos."""
    from gestao_leitos.models.leito import Leito
    from gestao_leitos.models.enums import StatusLeitoEnum

    def _criar_leito(setor_id, codigo_leito="101A", status=StatusLeitoEnum.VAGO.value, is_pcp=False, **kwargs):
        leito = Leito(
            setor_id=setor_id,
            codigo_leito=codigo_leito,
            status=status,
            is_pcp=is_pcp,
            **kwargs
        )
        session.add(leito)
        session.commit()
        session.refresh(leito)
        return leito

    return _criar_leito


@pytest.fixture
def criar_paciente(session):
    """Factory fixture para criar pacientes."""
    from gestao_leitos.models.paciente import Paciente

    def _criar_paciente(
        nome_paciente="Paciente Teste",
        sexo="F",
        data_nascimento="10/05/1980",
        leito=None,
        **kwargs
    ):
        if leito is not None:
            kwargs.setdefault("leito_id", leito.id)
            kwargs.setdefault("setor_id", leito.setor_id)

        paciente = Paciente(
            nome_paciente=nome_paciente,
            sexo=sexo,
            data_nascimento=data_nascimento,
            **kwargs
        )
        session.add(paciente)
        session.commit()
        session.refresh(paciente)
        return paciente

    return _criar_paciente


@pytest.fixture
def criar_infeccao(session):
    """Factory fixture para criar infecções."""
    from gestao_leitos.models.infeccao import Infeccao

    def _criar_infeccao(sigla_infeccao="MRSA", nome_infeccao=None, **kwargs):
        infeccao = Infeccao(sigla_infeccao=sigla_infeccao, nome_infeccao=nome_infeccao, **kwargs)
        session.add(infeccao)
        session.commit()
        session.refresh(infeccao)
        return infeccao

    return _criar_infeccao
