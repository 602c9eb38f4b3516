"""
Endpoints de Isolamentos.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List

from gestao_leitos.core.database import get_session
from gestao_leitos.schemas.responses import DetalheRiscoResponse, RiscoPacienteResponse
from gestao_leitos.services.dados_hospitalares_service import DadosHospitalaresService
from gestao_leitos.services.risco_contaminacao_service import (
    identificar_riscos_contaminacao,
    ordenar_riscos,
)

router = APIRouter()


@router.get("/riscos", response_model=List[RiscoPacienteResponse])
def listar_riscos_contaminacao(session: Session = Depends(get_session)):
    """Pacientes isolados com risco de contaminação cruzada, ordenados por nome."""
    snapshot = DadosHospitalaresService(session).carregar()
    riscos = identificar_riscos_contaminacao(
        snapshot.pacientes, snapshot.leitos, snapshot.quartos, snapshot.setores
    )
    return [
        RiscoPacienteResponse(
            paciente_id=risco.paciente_id,
            nome_paciente=risco.nome_paciente,
            sexo=risco.sexo,
            motivos=sorted(motivo.value for motivo in risco.motivos),
            detalhes=[
                DetalheRiscoResponse(
                    tipo=detalhe.tipo.value,
                    mensagem=detalhe.mensagem,
                    setor_id=detalhe.setor_id,
                    setor_nome=detalhe.setor_nome,
                    quarto_id=detalhe.quarto_id,
                    quarto_nome=detalhe.quarto_nome,
                    leito_id=detalhe.leito_id,
                    leito_codigo=detalhe.leito_codigo,
                )
                for detalhe in risco.detalhes
            ],
        )
        for risco in ordenar_riscos(riscos)
    ]
