"""
Serviço de Pedidos de UTI.
Finaliza automaticamente os pedidos de UTI de pacientes que já estão
internados em um setor de UTI.

Localização: gestao_leitos/services/uti_service.py
"""
from typing import Iterable, List, Optional
from sqlmodel import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from gestao_leitos.config import settings
from gestao_leitos.core.exceptions import RegulacaoError
from gestao_leitos.repositories.paciente_repo import PacienteRepository
from gestao_leitos.schemas.normalizados import (
    LeitoNormalizado,
    PacienteNormalizado,
    SetorNormalizado,
)
from gestao_leitos.services.auditoria_service import registrar_acao
from gestao_leitos.services.dados_hospitalares_service import DadosHospitalaresService

logger = logging.getLogger("gestao_leitos.uti")


def identificar_pedidos_uti_atendidos(
    pacientes: Iterable[PacienteNormalizado],
    leitos: Iterable[LeitoNormalizado],
    setores: Iterable[SetorNormalizado]
) -> List[PacienteNormalizado]:
    """
    Pacientes com pedido de UTI pendente já alocados em leito de UTI.

    O setor é o do leito atual; sem leito conhecido, vale o setor_id
    do próprio paciente.
    """
    leitos_por_id = {leito.id: leito for leito in leitos}
    setores_por_id = {setor.id: setor for setor in setores}

    atendidos = []
    for paciente in pacientes:
        if paciente.pedido_uti is None:
            continue
        leito = leitos_por_id.get(paciente.leito_id) if paciente.leito_id else None
        setor_id = leito.setor_id if leito is not None else paciente.setor_id
        setor = setores_por_id.get(setor_id)
        if setor is not None and setor.es_uti:
            atendidos.append(paciente)
    return atendidos


class UtiService:
    """Serviço de manutenção dos pedidos de UTI."""

    def __init__(self, session: Session):
        self.session = session
        self.paciente_repo = PacienteRepository(session)

    def finalizar_pedidos_atendidos(self, usuario_nome: Optional[str] = None) -> List[str]:
        """
        Remove o pedido de UTI dos pacientes já internados na UTI.

        Todas as remoções são gravadas em um único commit; a auditoria
        é feita depois, uma entrada por paciente.

        Returns:
            IDs dos pacientes cujos pedidos foram finalizados
        """
        snapshot = DadosHospitalaresService(self.session).carregar()
        atendidos = identificar_pedidos_uti_atendidos(
            snapshot.pacientes, snapshot.leitos, snapshot.setores
        )
        if not atendidos:
            return []

        finalizados = []
        try:
            for normalizado in atendidos:
                paciente = self.paciente_repo.obter_por_id(normalizado.id)
                if paciente is None or not paciente.pedido_uti:
                    continue
                paciente.pedido_uti = None
                self.session.add(paciente)
                finalizados.append(normalizado)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Erro ao finalizar pedidos de UTI: {e}")
            raise RegulacaoError("Não foi possível finalizar os pedidos de UTI. Tente novamente.") from e

        for paciente in finalizados:
            registrar_acao(
                self.session,
                settings.AUDITORIA_PAGINA_MAPA,
                f"Pedido de UTI do paciente '{paciente.nome_paciente}' finalizado automaticamente: "
                f"paciente já internado em leito de UTI.",
                usuario_nome,
            )

        logger.info(f"{len(finalizados)} pedido(s) de UTI finalizado(s)")
        return [paciente.id for paciente in finalizados]
