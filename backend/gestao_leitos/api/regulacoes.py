"""
Endpoints de Regulação.

Localização: gestao_leitos/api/regulacoes.py
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from gestao_leitos.core.database import get_session
from gestao_leitos.core.exceptions import (
    LeitoNotFoundError,
    PacienteNotFoundError,
    RegulacaoError,
    RegulacaoInativaError,
    TransacaoObrigatoriaError,
)
from gestao_leitos.schemas.responses import ConcluirRegulacaoRequest, MessageResponse
from gestao_leitos.services.regulacao_service import RegulacaoService

router = APIRouter()


@router.post("/{paciente_id}/concluir", response_model=MessageResponse)
def concluir_regulacao(
    paciente_id: str,
    request: ConcluirRegulacaoRequest,
    session: Session = Depends(get_session)
):
    """Conclui a regulação ativa do paciente."""
    service = RegulacaoService(session)

    try:
        resultado = service.concluir(
            paciente_id,
            leitos_liberar_ids=request.leitos_liberar_ids,
            usuario_nome=request.usuario_nome,
        )
    except PacienteNotFoundError:
        raise HTTPException(status_code=404, detail="Paciente não encontrado")
    except LeitoNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except RegulacaoInativaError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except TransacaoObrigatoriaError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except RegulacaoError as e:
        raise HTTPException(status_code=503, detail=e.message)

    return MessageResponse(
        success=True,
        message=resultado.log_entries[0],
        data={
            "setor_destino_id": resultado.setor_destino_id,
            "leito_destino_id": resultado.leito_destino_id,
            "tempo_regulacao_minutos": resultado.tempo_regulacao_minutos,
            "leitos_envolvidos": resultado.leitos_envolvidos,
            "log_entries": resultado.log_entries,
        }
    )
