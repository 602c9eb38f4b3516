"""
Serviço de Auditoria.
Grava a trilha de ações do sistema. Falhas de gravação são registradas
no log e nunca interrompem o fluxo que originou a ação.

Localização: gestao_leitos/services/auditoria_service.py
"""
from typing import Optional
from sqlmodel import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from gestao_leitos.config import settings
from gestao_leitos.models.auditoria import LogAuditoria

logger = logging.getLogger("gestao_leitos.auditoria")


def registrar_acao(
    session: Session,
    acao: str,
    detalhes: str,
    usuario_nome: Optional[str] = None,
    usuario_id: Optional[str] = None
) -> bool:
    """
    Inclui uma entrada no log de auditoria.

    Args:
        session: Sessão de banco (commit próprio)
        acao: Página ou categoria (ex.: "Regulação de Leitos")
        detalhes: Texto livre descrevendo a ação
        usuario_nome: Nome de exibição do usuário
        usuario_id: Identificador do usuário

    Returns:
        True se a entrada foi gravada
    """
    entrada = LogAuditoria(
        acao=acao,
        detalhes=detalhes,
        user_id=usuario_id or "sistema",
        user_name=usuario_nome or settings.USUARIO_SISTEMA_NOME,
    )
    try:
        session.add(entrada)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Falha ao gravar auditoria ({acao}): {e}")
        return False

    logger.debug(f"Auditoria [{acao}]: {detalhes}")
    return True
