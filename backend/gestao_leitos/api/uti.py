"""
Endpoints de Pedidos de UTI.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session
from typing import Optional

from gestao_leitos.core.database import get_session
from gestao_leitos.core.exceptions import RegulacaoError
from gestao_leitos.schemas.responses import FinalizarPedidosUtiRequest, MessageResponse
from gestao_leitos.services.uti_service import UtiService

router = APIRouter()


@router.post("/pedidos/finalizar-atendidos", response_model=MessageResponse)
def finalizar_pedidos_atendidos(
    request: Optional[FinalizarPedidosUtiRequest] = None,
    session: Session = Depends(get_session)
):
    """Remove os pedidos de UTI de pacientes já internados em leito de UTI."""
    usuario_nome = request.usuario_nome if request else None

    try:
        finalizados = UtiService(session).finalizar_pedidos_atendidos(usuario_nome)
    except RegulacaoError as e:
        raise HTTPException(status_code=503, detail=e.message)

    return MessageResponse(
        success=True,
        message=f"{len(finalizados)} pedido(s) de UTI finalizado(s)",
        data={"pacientes_ids": finalizados}
    )
