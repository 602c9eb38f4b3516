"""
Serviço de Risco de Contaminação.
Identifica pacientes isolados em situação de risco de contaminação cruzada.

Motivos:
- setor_aberto: paciente isolado em setor aberto (PS/Emergência)
- falta_coorte: paciente isolado dividindo quarto com paciente sem isolamento
- coorte_incompativel: pacientes isolados com isolamentos diferentes no mesmo quarto

Localização: gestao_leitos/services/risco_contaminacao_service.py
"""
from typing import Dict, Iterable, List, Optional, Set
from dataclasses import dataclass, field
import logging

from gestao_leitos.config import settings
from gestao_leitos.models.enums import TipoRiscoEnum
from gestao_leitos.schemas.normalizados import (
    LeitoNormalizado,
    PacienteNormalizado,
    QuartoNormalizado,
    SetorNormalizado,
)
from gestao_leitos.services.coorte_service import (
    QuartoEstruturado,
    chaves_isolamento_ativo,
    mapear_ocupantes,
    montar_estrutura,
)
from gestao_leitos.utils.texto import normalizar_texto

logger = logging.getLogger("gestao_leitos.risco_contaminacao")


@dataclass
class DetalheRisco:
    """Uma ocorrência de risco com o contexto onde foi encontrada."""
    tipo: TipoRiscoEnum
    mensagem: str
    chave_contexto: str
    setor_id: Optional[str] = None
    setor_nome: Optional[str] = None
    quarto_id: Optional[str] = None
    quarto_nome: Optional[str] = None
    leito_id: Optional[str] = None
    leito_codigo: Optional[str] = None


@dataclass
class RiscoPaciente:
    """Riscos acumulados de um paciente."""
    paciente_id: str
    nome_paciente: str
    sexo: Optional[str] = None
    motivos: Set[TipoRiscoEnum] = field(default_factory=set)
    detalhes: List[DetalheRisco] = field(default_factory=list)

    def adicionar(self, detalhe: DetalheRisco) -> None:
        """Inclui o detalhe, ignorando repetições do mesmo motivo no mesmo contexto."""
        for existente in self.detalhes:
            if existente.tipo == detalhe.tipo and existente.chave_contexto == detalhe.chave_contexto:
                return
        self.motivos.add(detalhe.tipo)
        self.detalhes.append(detalhe)


def _mensagem(tipo: TipoRiscoEnum, setor_nome: Optional[str], quarto_nome: Optional[str]) -> str:
    if tipo == TipoRiscoEnum.SETOR_ABERTO:
        return f"Paciente com isolamento em setor aberto ({setor_nome or 'Setor não identificado'})"
    if tipo == TipoRiscoEnum.FALTA_COORTE:
        return (
            "Paciente isolado compartilhando quarto com paciente não isolado "
            f"({setor_nome or 'Setor'}, {quarto_nome or 'Quarto'})"
        )
    if tipo == TipoRiscoEnum.COORTE_INCOMPATIVEL:
        return (
            "Pacientes com isolamentos diferentes no mesmo quarto "
            f"({setor_nome or 'Setor'}, {quarto_nome or 'Quarto'})"
        )
    return "Risco de contaminação cruzada identificado"


def setor_aberto(setor: Optional[SetorNormalizado]) -> bool:
    """Setor aberto: tipo ou nome configurado como área sem isolamento físico."""
    if setor is None:
        return False
    tipos = {normalizar_texto(tipo) for tipo in settings.TIPOS_SETOR_ABERTOS}
    nomes = {normalizar_texto(nome) for nome in settings.SETORES_ABERTOS}
    return (
        normalizar_texto(setor.tipo_setor) in tipos
        or normalizar_texto(setor.nome_setor) in nomes
    )


class _MapaRiscos:
    """Acumulador interno paciente_id -> RiscoPaciente."""

    def __init__(self):
        self.riscos: Dict[str, RiscoPaciente] = {}

    def registrar(
        self,
        paciente: PacienteNormalizado,
        tipo: TipoRiscoEnum,
        chave_contexto: str,
        setor: SetorNormalizado,
        leito: LeitoNormalizado,
        quarto: Optional[QuartoEstruturado] = None
    ) -> None:
        risco = self.riscos.get(paciente.id)
        if risco is None:
            risco = RiscoPaciente(
                paciente_id=paciente.id,
                nome_paciente=paciente.nome_paciente,
                sexo=paciente.sexo_exibicao,
            )
            self.riscos[paciente.id] = risco

        quarto_nome = quarto.nome_quarto if quarto else None
        risco.adicionar(DetalheRisco(
            tipo=tipo,
            mensagem=_mensagem(tipo, setor.nome_exibicao, quarto_nome),
            chave_contexto=chave_contexto,
            setor_id=setor.id,
            setor_nome=setor.nome_exibicao,
            quarto_id=quarto.id if quarto else None,
            quarto_nome=quarto_nome,
            leito_id=leito.id,
            leito_codigo=leito.codigo_leito,
        ))


def _avaliar_quarto(
    mapa: _MapaRiscos,
    quarto: QuartoEstruturado,
    ocupantes_por_leito: Dict[str, PacienteNormalizado]
) -> None:
    ocupantes = [
        (leito, ocupantes_por_leito[leito.id], chaves_isolamento_ativo(ocupantes_por_leito[leito.id]))
        for leito in quarto.leitos
        if leito.id in ocupantes_por_leito
    ]
    if len(ocupantes) < 2:
        return

    isolados = [item for item in ocupantes if item[2]]
    if not isolados:
        return

    nao_isolados = [item for item in ocupantes if not item[2]]
    if nao_isolados:
        chave = f"{TipoRiscoEnum.FALTA_COORTE.value}-{quarto.id}"
        for leito, paciente, _ in isolados + nao_isolados:
            mapa.registrar(paciente, TipoRiscoEnum.FALTA_COORTE, chave, quarto.setor, leito, quarto)

    chave = f"{TipoRiscoEnum.COORTE_INCOMPATIVEL.value}-{quarto.id}"
    for leito, paciente, chaves in isolados:
        if any(outras != chaves for _, outro, outras in isolados if outro.id != paciente.id):
            mapa.registrar(paciente, TipoRiscoEnum.COORTE_INCOMPATIVEL, chave, quarto.setor, leito, quarto)


def identificar_riscos_contaminacao(
    pacientes: Iterable[PacienteNormalizado],
    leitos: Iterable[LeitoNormalizado],
    quartos: Iterable[QuartoNormalizado],
    setores: Iterable[SetorNormalizado]
) -> Dict[str, RiscoPaciente]:
    """
    Varre o hospital em busca de riscos de contaminação cruzada.

    Args:
        pacientes: Pacientes normalizados
        leitos: Leitos normalizados
        quartos: Quartos cadastrados (setores que não são enfermaria)
        setores: Setores normalizados

    Returns:
        Mapa paciente_id -> RiscoPaciente (apenas pacientes com risco)
    """
    ocupantes_por_leito = mapear_ocupantes(pacientes)
    mapa = _MapaRiscos()

    for estrutura in montar_estrutura(setores, leitos, quartos):
        setor = estrutura.setor
        aberto = setor_aberto(setor)

        if aberto:
            for leito in estrutura.todos_leitos():
                paciente = ocupantes_por_leito.get(leito.id)
                if paciente is None or not chaves_isolamento_ativo(paciente):
                    continue
                mapa.registrar(
                    paciente,
                    TipoRiscoEnum.SETOR_ABERTO,
                    f"{TipoRiscoEnum.SETOR_ABERTO.value}-{setor.id}",
                    setor,
                    leito,
                )

        for quarto in estrutura.quartos:
            _avaliar_quarto(mapa, quarto, ocupantes_por_leito)

    if mapa.riscos:
        logger.info(f"{len(mapa.riscos)} paciente(s) com risco de contaminação identificado(s)")
    return mapa.riscos


def ordenar_riscos(riscos: Dict[str, RiscoPaciente]) -> List[RiscoPaciente]:
    """Lista de riscos ordenada pelo nome do paciente."""
    return sorted(
        riscos.values(),
        key=lambda risco: (normalizar_texto(risco.nome_paciente), risco.paciente_id)
    )
