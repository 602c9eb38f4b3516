"""
Serviço de Leitos Vagos.
Lista, por setor de Enfermaria/UTI, os leitos livres com a restrição de
coorte vigente e o texto de compatibilidade.

Localização: gestao_leitos/services/leitos_vagos_service.py
"""
from typing import Iterable, List, Optional
from dataclasses import dataclass, field

from gestao_leitos.schemas.normalizados import (
    LeitoNormalizado,
    PacienteNormalizado,
    QuartoNormalizado,
    SetorNormalizado,
)
from gestao_leitos.services.coorte_service import (
    RestricaoCoorte,
    aplicar_restricoes_coorte,
    descrever_restricao,
    mapear_ocupantes,
    montar_estrutura,
)


@dataclass
class LeitoVago:
    """Leito livre com a restrição de coorte do quarto."""
    leito_id: str
    codigo_leito: str
    status: str
    is_pcp: bool
    quarto_nome: Optional[str]
    restricao: Optional[RestricaoCoorte]
    compatibilidade: str
    badges: List[str] = field(default_factory=list)


@dataclass
class SetorLeitosVagos:
    """Leitos livres de um setor."""
    setor_id: str
    nome_setor: str
    tipo_setor: str
    leitos: List[LeitoVago] = field(default_factory=list)


def _leito_livre(leito: LeitoNormalizado) -> bool:
    return leito.disponivel and not leito.reserva_externa and not leito.regulacao_em_andamento


def listar_leitos_vagos_por_setor(
    setores: Iterable[SetorNormalizado],
    leitos: Iterable[LeitoNormalizado],
    quartos: Iterable[QuartoNormalizado],
    pacientes: Iterable[PacienteNormalizado]
) -> List[SetorLeitosVagos]:
    """
    Leitos vagos agrupados por setor (apenas Enfermaria e UTI).

    Leitos reservados, com reserva externa ou com regulação em andamento
    não são listados. Setores sem leito vago são omitidos.

    Returns:
        Setores na ordem recebida, leitos ordenados pelo código
    """
    setores = [setor for setor in setores if setor.es_enfermaria or setor.es_uti]
    leitos = list(leitos)
    ocupantes_por_leito = mapear_ocupantes(pacientes)

    resultado = []
    for estrutura in montar_estrutura(setores, leitos, quartos):
        restricoes = aplicar_restricoes_coorte(estrutura.quartos, ocupantes_por_leito)
        quarto_por_leito = {
            leito.id: quarto.nome_quarto
            for quarto in estrutura.quartos
            for leito in quarto.leitos
        }

        vagos = []
        for leito in sorted(estrutura.todos_leitos(), key=lambda l: l.codigo_leito):
            if not _leito_livre(leito):
                continue
            restricao = restricoes.get(leito.id)
            descricao = descrever_restricao(restricao)
            vagos.append(LeitoVago(
                leito_id=leito.id,
                codigo_leito=leito.codigo_leito,
                status=leito.status,
                is_pcp=leito.is_pcp,
                quarto_nome=quarto_por_leito.get(leito.id),
                restricao=restricao,
                compatibilidade=descricao["compatibilidade"],
                badges=descricao["badges"],
            ))

        if vagos:
            setor = estrutura.setor
            resultado.append(SetorLeitosVagos(
                setor_id=setor.id,
                nome_setor=setor.nome_exibicao,
                tipo_setor=setor.tipo_setor,
                leitos=vagos,
            ))

    return resultado
