"""
Serviço de Regulação.
Conclusão de uma regulação de leito (transferência de paciente).

A conclusão altera, numa única transação:
1. Paciente: remove a regulação ativa e move para o leito/setor de destino
2. Leito de origem: Higienização
3. Leito de destino: Ocupado
4. Leitos adicionais: Vago
5. Histórico de regulações: status Concluída com tempo de regulação

concluir_regulacao apenas prepara as alterações na sessão recebida;
quem fornece a sessão é responsável pelo commit.

Localização: gestao_leitos/services/regulacao_service.py
"""
from typing import Iterable, List, Optional, Sequence
from sqlmodel import Session
from sqlalchemy.exc import SQLAlchemyError
from dataclasses import dataclass, field
from datetime import datetime
import logging

from gestao_leitos.config import settings
from gestao_leitos.core.exceptions import (
    BaseAppException,
    LeitoNotFoundError,
    PacienteNotFoundError,
    RegulacaoError,
    RegulacaoInativaError,
    TransacaoObrigatoriaError,
)
from gestao_leitos.models.enums import StatusLeitoEnum, StatusRegulacaoEnum, TipoSetorEnum
from gestao_leitos.models.historico_regulacao import HistoricoRegulacao
from gestao_leitos.models.leito import Leito
from gestao_leitos.models.paciente import Paciente
from gestao_leitos.models.setor import Setor
from gestao_leitos.repositories.leito_repo import LeitoRepository
from gestao_leitos.repositories.paciente_repo import PacienteRepository
from gestao_leitos.schemas.normalizados import PedidoUTI, RegulacaoAtiva
from gestao_leitos.services.auditoria_service import registrar_acao
from gestao_leitos.utils.datas import agora_utc, diferenca_em_minutos, normalizar_data
from gestao_leitos.utils.texto import textos_equivalentes

logger = logging.getLogger("gestao_leitos.regulacao")


@dataclass
class ResultadoConclusaoRegulacao:
    """Resultado da conclusão de uma regulação."""
    setor_destino_id: Optional[str]
    leito_destino_id: Optional[str]
    tempo_regulacao_minutos: Optional[int]
    leitos_envolvidos: List[str] = field(default_factory=list)
    log_entries: List[str] = field(default_factory=list)


# ============================================
# FUNÇÕES AUXILIARES
# ============================================

def _registrar_status_leito(leito: Leito, status: StatusLeitoEnum, momento: datetime) -> None:
    """Altera o status do leito e inclui a entrada no histórico (sem duplicar)."""
    entrada = {"status": status.value, "timestamp": momento.isoformat()}
    historico = list(leito.historico or [])
    if entrada not in historico:
        historico.append(entrada)

    leito.status = status.value
    # Lista nova para o SQLAlchemy detectar a alteração da coluna JSON
    leito.historico = historico
    leito.regulacao_em_andamento = None
    leito.status_updated_at = momento


def _obter_leito(transacao: Session, leito: Optional[Leito], leito_id: Optional[str]) -> Optional[Leito]:
    if leito is not None:
        return leito
    if not leito_id:
        return None
    encontrado = transacao.get(Leito, leito_id)
    if encontrado is None:
        raise LeitoNotFoundError(leito_id)
    return encontrado


def _descrever_leito(transacao: Session, leito: Optional[Leito], padrao: str) -> str:
    if leito is None:
        return padrao
    setor = transacao.get(Setor, leito.setor_id) if leito.setor_id else None
    nome_setor = (setor.sigla_setor or setor.nome_setor) if setor else None
    return f"{nome_setor or 'N/A'} - {leito.codigo_leito or 'N/A'}"


# ============================================
# PROTOCOLO DE CONCLUSÃO
# ============================================

def concluir_regulacao(
    transacao: Optional[Session],
    paciente: Paciente,
    leito_origem: Optional[Leito] = None,
    leito_destino: Optional[Leito] = None,
    setor_destino: Optional[Setor] = None,
    leitos_liberar: Sequence[Leito] = (),
    data_referencia: Optional[datetime] = None,
    usuario_nome: Optional[str] = None
) -> ResultadoConclusaoRegulacao:
    """
    Prepara na transação todas as alterações da conclusão da regulação.

    Leitos e setor não informados são resolvidos pelos IDs da regulação
    ativa do paciente.

    Args:
        transacao: Sessão do chamador (obrigatória, sem commit aqui)
        paciente: Paciente com regulação ativa
        leito_origem: Leito de origem
        leito_destino: Leito de destino
        setor_destino: Setor de destino
        leitos_liberar: Leitos adicionais a liberar (Vago)
        data_referencia: Momento da conclusão (padrão: agora)
        usuario_nome: Nome do usuário que concluiu

    Returns:
        ResultadoConclusaoRegulacao com as mensagens de auditoria

    Raises:
        TransacaoObrigatoriaError: Sem transação
        RegulacaoInativaError: Paciente sem regulação ativa
        LeitoNotFoundError: Leito da regulação inexistente
    """
    if transacao is None:
        raise TransacaoObrigatoriaError()

    if not paciente.regulacao_ativa:
        raise RegulacaoInativaError(paciente.id)

    regulacao = RegulacaoAtiva.model_validate(paciente.regulacao_ativa)
    momento = normalizar_data(data_referencia) or agora_utc()
    nome_usuario = usuario_nome or settings.USUARIO_SISTEMA_NOME

    leito_origem = _obter_leito(transacao, leito_origem, regulacao.leito_origem_id)
    leito_destino = _obter_leito(transacao, leito_destino, regulacao.leito_destino_id)
    leito_origem_id = leito_origem.id if leito_origem else None
    leito_destino_id = leito_destino.id if leito_destino else None

    if setor_destino is not None:
        setor_destino_id = setor_destino.id
    elif leito_destino is not None and leito_destino.setor_id:
        setor_destino_id = leito_destino.setor_id
    else:
        setor_destino_id = regulacao.setor_destino_id

    if setor_destino is None and setor_destino_id:
        setor_destino = transacao.get(Setor, setor_destino_id)

    destino_uti = setor_destino is not None and textos_equivalentes(
        setor_destino.tipo_setor, TipoSetorEnum.UTI.value
    )
    pedido_uti = PedidoUTI.model_validate(paciente.pedido_uti) if paciente.pedido_uti else None

    # 1. Paciente
    paciente.regulacao_ativa = None
    paciente.leito_id = leito_destino_id
    paciente.setor_id = setor_destino_id
    if destino_uti and pedido_uti is not None:
        paciente.pedido_uti = None
    if paciente.pedido_remanejamento:
        paciente.pedido_remanejamento = None
    transacao.add(paciente)

    # 2-4. Leitos
    if leito_origem is not None:
        _registrar_status_leito(leito_origem, StatusLeitoEnum.HIGIENIZACAO, momento)
        transacao.add(leito_origem)

    if leito_destino is not None:
        _registrar_status_leito(leito_destino, StatusLeitoEnum.OCUPADO, momento)
        transacao.add(leito_destino)

    extras = [leito for leito in leitos_liberar if leito is not None and leito.id]
    for leito in extras:
        _registrar_status_leito(leito, StatusLeitoEnum.VAGO, momento)
        transacao.add(leito)

    # 5. Histórico
    tempo_regulacao = diferenca_em_minutos(momento, regulacao.iniciado_em)

    historico = transacao.get(HistoricoRegulacao, paciente.id)
    if historico is None:
        historico = HistoricoRegulacao(
            paciente_id=paciente.id,
            nome_paciente=paciente.nome_paciente,
            leito_origem_id=regulacao.leito_origem_id,
            setor_origem_id=regulacao.setor_origem_id,
            data_inicio=normalizar_data(regulacao.iniciado_em),
        )
    historico.status = StatusRegulacaoEnum.CONCLUIDA.value
    historico.status_final = StatusRegulacaoEnum.CONCLUIDA.value
    historico.data_conclusao = agora_utc()
    historico.user_name_conclusao = nome_usuario
    historico.tempo_regulacao_minutos = tempo_regulacao
    historico.leito_destino_final_id = leito_destino_id
    historico.setor_destino_final_id = setor_destino_id
    transacao.add(historico)

    # 6. Auditoria
    origem_desc = _descrever_leito(transacao, leito_origem, "Origem não informada")
    destino_desc = _descrever_leito(transacao, leito_destino, "Destino não informado")
    if tempo_regulacao is not None:
        duracao = f"em {tempo_regulacao} minutos"
    else:
        duracao = "(tempo de regulação indisponível)"

    log_entries = [
        f"Regulação para o paciente '{paciente.nome_paciente}' (do leito {origem_desc} "
        f"para {destino_desc}) foi concluída por {nome_usuario} {duracao}."
    ]

    if destino_uti and pedido_uti is not None:
        tempo_espera = diferenca_em_minutos(momento, pedido_uti.solicitado_em)
        if tempo_espera is not None:
            log_entries.append(
                f"Pedido de UTI do paciente '{paciente.nome_paciente}' foi atendido. "
                f"Tempo de espera: {tempo_espera} minutos."
            )
        else:
            log_entries.append(f"Pedido de UTI do paciente '{paciente.nome_paciente}' foi atendido.")

    leitos_envolvidos = list(dict.fromkeys(
        leito_id
        for leito_id in [leito_origem_id, leito_destino_id] + [leito.id for leito in extras]
        if leito_id
    ))

    return ResultadoConclusaoRegulacao(
        setor_destino_id=setor_destino_id,
        leito_destino_id=leito_destino_id,
        tempo_regulacao_minutos=tempo_regulacao,
        leitos_envolvidos=leitos_envolvidos,
        log_entries=log_entries,
    )


# ============================================
# SERVIÇO
# ============================================

class RegulacaoService:
    """
    Serviço de regulação sobre a sessão do banco.

    Maneja:
    - Conclusão da regulação em uma única transação
    - Auditoria após o commit
    """

    def __init__(self, session: Session):
        self.session = session
        self.paciente_repo = PacienteRepository(session)
        self.leito_repo = LeitoRepository(session)

    def _leitos_liberar(self, leitos_ids: Iterable[str]) -> List[Leito]:
        ids = [leito_id for leito_id in dict.fromkeys(leitos_ids) if leito_id]
        leitos = self.leito_repo.obter_por_ids(ids)
        encontrados = {leito.id for leito in leitos}
        for leito_id in ids:
            if leito_id not in encontrados:
                raise LeitoNotFoundError(leito_id)
        return leitos

    def concluir(
        self,
        paciente_id: str,
        leitos_liberar_ids: Iterable[str] = (),
        usuario_nome: Optional[str] = None,
        data_referencia: Optional[datetime] = None
    ) -> ResultadoConclusaoRegulacao:
        """
        Conclui a regulação ativa de um paciente.

        A linha do paciente é bloqueada e a regulação ativa é verificada
        dentro da transação; uma conclusão concorrente encontra a
        regulação já removida e falha com RegulacaoInativaError.

        Args:
            paciente_id: ID do paciente
            leitos_liberar_ids: Leitos adicionais a liberar
            usuario_nome: Nome do usuário que concluiu
            data_referencia: Momento da conclusão (padrão: agora)

        Returns:
            ResultadoConclusaoRegulacao

        Raises:
            PacienteNotFoundError, LeitoNotFoundError, RegulacaoInativaError
            RegulacaoError: Falha ao gravar no banco (pode ser repetida)
        """
        logger.info(f"Concluindo regulação do paciente {paciente_id}")

        try:
            paciente = self.paciente_repo.obter_para_atualizacao(paciente_id)
            if paciente is None:
                raise PacienteNotFoundError(paciente_id)

            resultado = concluir_regulacao(
                self.session,
                paciente,
                leitos_liberar=self._leitos_liberar(leitos_liberar_ids),
                data_referencia=data_referencia,
                usuario_nome=usuario_nome,
            )
            self.session.commit()
        except BaseAppException:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Erro ao gravar conclusão da regulação do paciente {paciente_id}: {e}")
            raise RegulacaoError(
                "Não foi possível concluir a regulação. Tente novamente."
            ) from e

        logger.info(
            f"Regulação do paciente {paciente_id} concluída: leito {resultado.leito_destino_id}, "
            f"{resultado.tempo_regulacao_minutos} min"
        )

        for entrada in resultado.log_entries:
            registrar_acao(self.session, settings.AUDITORIA_PAGINA_REGULACAO, entrada, usuario_nome)

        return resultado
