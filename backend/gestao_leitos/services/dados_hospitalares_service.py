"""
Serviço de Dados Hospitalares.
Carrega e normaliza todas as coleções de uma vez, produzindo o retrato
usado pelos serviços de coorte, compatibilidade e risco.

Localização: gestao_leitos/services/dados_hospitalares_service.py
"""
from typing import Dict, List, Optional
from sqlmodel import Session
from dataclasses import dataclass, field
import logging

from gestao_leitos.models.infeccao import Infeccao
from gestao_leitos.repositories.infeccao_repo import InfeccaoRepository
from gestao_leitos.repositories.leito_repo import LeitoRepository, QuartoRepository, SetorRepository
from gestao_leitos.repositories.paciente_repo import PacienteRepository
from gestao_leitos.schemas.normalizados import (
    LeitoNormalizado,
    PacienteNormalizado,
    QuartoNormalizado,
    SetorNormalizado,
)
from gestao_leitos.services.normalizacao_service import (
    normalizar_leito,
    normalizar_paciente,
    normalizar_quarto,
    normalizar_setor,
)

logger = logging.getLogger("gestao_leitos.dados_hospitalares")


@dataclass
class SnapshotHospitalar:
    """Coleções normalizadas do hospital em um instante."""
    pacientes: List[PacienteNormalizado] = field(default_factory=list)
    leitos: List[LeitoNormalizado] = field(default_factory=list)
    setores: List[SetorNormalizado] = field(default_factory=list)
    quartos: List[QuartoNormalizado] = field(default_factory=list)
    infeccoes: Dict[str, Infeccao] = field(default_factory=dict)

    def paciente(self, paciente_id: str) -> Optional[PacienteNormalizado]:
        for paciente in self.pacientes:
            if paciente.id == paciente_id:
                return paciente
        return None

    def setores_por_id(self) -> Dict[str, SetorNormalizado]:
        return {setor.id: setor for setor in self.setores}


class DadosHospitalaresService:
    """Leitura consolidada das coleções do hospital."""

    def __init__(self, session: Session):
        self.session = session
        self.paciente_repo = PacienteRepository(session)
        self.leito_repo = LeitoRepository(session)
        self.setor_repo = SetorRepository(session)
        self.quarto_repo = QuartoRepository(session)
        self.infeccao_repo = InfeccaoRepository(session)

    def carregar(self) -> SnapshotHospitalar:
        """
        Lê e normaliza todas as coleções.

        Os leitos recebem nome e sigla do setor para compor descrições.

        Returns:
            SnapshotHospitalar
        """
        infeccoes = self.infeccao_repo.obter_mapa()
        setores = [normalizar_setor(setor) for setor in self.setor_repo.obter_todos()]
        setores_por_id = {setor.id: setor for setor in setores}

        leitos = []
        for registro in self.leito_repo.obter_todos():
            leito = normalizar_leito(registro)
            setor = setores_por_id.get(leito.setor_id)
            if setor is not None:
                leito = leito.model_copy(update={
                    "nome_setor": setor.nome_setor,
                    "sigla_setor": setor.sigla_setor,
                })
            leitos.append(leito)

        snapshot = SnapshotHospitalar(
            pacientes=[normalizar_paciente(p, infeccoes) for p in self.paciente_repo.obter_todos()],
            leitos=leitos,
            setores=setores,
            quartos=[normalizar_quarto(q) for q in self.quarto_repo.obter_todos()],
            infeccoes=infeccoes,
        )
        logger.debug(
            f"Retrato carregado: {len(snapshot.pacientes)} pacientes, "
            f"{len(snapshot.leitos)} leitos, {len(snapshot.setores)} setores"
        )
        return snapshot
