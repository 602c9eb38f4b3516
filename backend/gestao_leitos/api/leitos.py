"""
Endpoints de Leitos.
Busca de leitos compatíveis e leitos vagos por setor.

Localização: gestao_leitos/api/leitos.py
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session
from typing import List, Optional

from gestao_leitos.core.database import get_session
from gestao_leitos.models.enums import ModoBuscaEnum
from gestao_leitos.schemas.normalizados import LeitoNormalizado
from gestao_leitos.schemas.responses import (
    LeitoResponse,
    LeitosCompativeisResponse,
    LeitoVagoResponse,
    RegraCompatibilidadeResponse,
    RelatorioCompatibilidadeResponse,
    SetorLeitosVagosResponse,
)
from gestao_leitos.services.compatibilidade_service import (
    RegraCompatibilidade,
    encontrar_leitos_compativeis,
    gerar_relatorio_compatibilidade,
)
from gestao_leitos.services.dados_hospitalares_service import DadosHospitalaresService
from gestao_leitos.services.leitos_vagos_service import listar_leitos_vagos_por_setor

router = APIRouter()


def _leito_response(leito: LeitoNormalizado) -> LeitoResponse:
    return LeitoResponse(
        id=leito.id,
        codigo_leito=leito.codigo_leito,
        setor_id=leito.setor_id,
        nome_setor=leito.nome_setor,
        sigla_setor=leito.sigla_setor,
        status=leito.status,
        is_pcp=leito.is_pcp,
    )


def _regra_response(regra: Optional[RegraCompatibilidade]) -> Optional[RegraCompatibilidadeResponse]:
    if regra is None:
        return None
    return RegraCompatibilidadeResponse(
        regra=regra.regra,
        mensagem=regra.mensagem,
        leitos=[_leito_response(leito) for leito in regra.leitos],
    )


@router.get("/compativeis/{paciente_id}", response_model=LeitosCompativeisResponse)
def listar_leitos_compativeis(
    paciente_id: str,
    modo: ModoBuscaEnum = Query(default=ModoBuscaEnum.ENFERMARIA),
    session: Session = Depends(get_session)
):
    """Lista os leitos que podem receber o paciente."""
    snapshot = DadosHospitalaresService(session).carregar()
    paciente = snapshot.paciente(paciente_id)
    if paciente is None:
        raise HTTPException(status_code=404, detail="Paciente não encontrado")

    leitos = encontrar_leitos_compativeis(
        paciente, snapshot.leitos, snapshot.setores, snapshot.pacientes, modo
    )
    return LeitosCompativeisResponse(
        paciente_id=paciente_id,
        modo=modo.value,
        total=len(leitos),
        leitos=[_leito_response(leito) for leito in leitos],
    )


@router.get("/compativeis/{paciente_id}/relatorio", response_model=RelatorioCompatibilidadeResponse)
def relatorio_compatibilidade(
    paciente_id: str,
    modo: ModoBuscaEnum = Query(default=ModoBuscaEnum.ENFERMARIA),
    session: Session = Depends(get_session)
):
    """Detalha quais regras excluíram cada leito."""
    snapshot = DadosHospitalaresService(session).carregar()
    paciente = snapshot.paciente(paciente_id)
    if paciente is None:
        raise HTTPException(status_code=404, detail="Paciente não encontrado")

    relatorio = gerar_relatorio_compatibilidade(
        paciente, snapshot.leitos, snapshot.setores, snapshot.pacientes, modo
    )
    return RelatorioCompatibilidadeResponse(
        paciente_id=relatorio.paciente_id,
        modo=relatorio.modo.value,
        idade=relatorio.idade,
        isolamentos=relatorio.isolamentos,
        motivos_pcp=relatorio.motivos_pcp,
        compativeis=[_leito_response(leito) for leito in relatorio.compativeis],
        por_pcp=_regra_response(relatorio.por_pcp),
        por_sexo=_regra_response(relatorio.por_sexo),
        por_isolamento=_regra_response(relatorio.por_isolamento),
    )


@router.get("/vagos", response_model=List[SetorLeitosVagosResponse])
def listar_leitos_vagos(session: Session = Depends(get_session)):
    """Leitos vagos de Enfermaria e UTI com a restrição de coorte de cada quarto."""
    snapshot = DadosHospitalaresService(session).carregar()
    setores = listar_leitos_vagos_por_setor(
        snapshot.setores, snapshot.leitos, snapshot.quartos, snapshot.pacientes
    )
    return [
        SetorLeitosVagosResponse(
            setor_id=setor.setor_id,
            nome_setor=setor.nome_setor,
            tipo_setor=setor.tipo_setor,
            leitos=[
                LeitoVagoResponse(
                    leito_id=leito.leito_id,
                    codigo_leito=leito.codigo_leito,
                    status=leito.status,
                    is_pcp=leito.is_pcp,
                    quarto_nome=leito.quarto_nome,
                    compatibilidade=leito.compatibilidade,
                    badges=leito.badges,
                )
                for leito in setor.leitos
            ],
        )
        for setor in setores
    ]
