"""
Serviço de Coorte.
Agrupa os leitos em quartos e deriva, a partir dos ocupantes atuais,
a restrição de sexo/isolamento dos leitos livres de cada quarto.

Todas as funções são puras: a restrição nunca é persistida e deve ser
recalculada a cada leitura.

Localização: gestao_leitos/services/coorte_service.py
"""
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional
from dataclasses import dataclass, field
import logging

from gestao_leitos.models.enums import SexoEnum
from gestao_leitos.schemas.normalizados import (
    LeitoNormalizado,
    PacienteNormalizado,
    QuartoNormalizado,
    SetorNormalizado,
)

logger = logging.getLogger("gestao_leitos.coorte")


_NOMES_SEXO = {
    SexoEnum.MASCULINO: "Masculino",
    SexoEnum.FEMININO: "Feminino",
}


@dataclass(frozen=True)
class RestricaoCoorte:
    """Restrição aplicada aos leitos livres de um quarto ocupado."""
    sexo: SexoEnum
    isolamentos: FrozenSet[str] = frozenset()


@dataclass
class QuartoEstruturado:
    """Quarto com seus leitos já resolvidos."""
    id: str
    nome_quarto: str
    setor: SetorNormalizado
    leitos: List[LeitoNormalizado] = field(default_factory=list)
    dinamico: bool = False


@dataclass
class SetorEstruturado:
    """Setor com quartos e leitos que não pertencem a nenhum quarto."""
    setor: SetorNormalizado
    quartos: List[QuartoEstruturado] = field(default_factory=list)
    leitos_sem_quarto: List[LeitoNormalizado] = field(default_factory=list)

    def todos_leitos(self) -> List[LeitoNormalizado]:
        leitos = [leito for quarto in self.quartos for leito in quarto.leitos]
        return leitos + list(self.leitos_sem_quarto)


# ============================================
# CHAVES DE ISOLAMENTO
# ============================================

def chaves_isolamento_ativo(paciente: Optional[PacienteNormalizado]) -> FrozenSet[str]:
    """
    Conjunto de rótulos dos isolamentos ativos do paciente.

    Examples:
        Paciente com MRSA confirmado e VRE descartado -> frozenset({"MRSA"})
    """
    if paciente is None:
        return frozenset()
    return frozenset(
        iso.rotulo for iso in paciente.isolamentos
        if iso.status_considerado_ativo and iso.rotulo
    )


def mapear_ocupantes(pacientes: Iterable[PacienteNormalizado]) -> Dict[str, PacienteNormalizado]:
    """Mapa leito_id -> paciente a partir do leito atual de cada paciente."""
    ocupantes = {}
    for paciente in pacientes:
        if not paciente.leito_id:
            continue
        if paciente.leito_id in ocupantes:
            logger.warning(
                f"Leito {paciente.leito_id} associado a mais de um paciente; "
                f"mantido {ocupantes[paciente.leito_id].id}"
            )
            continue
        ocupantes[paciente.leito_id] = paciente
    return ocupantes


# ============================================
# ESTRUTURA FÍSICA
# ============================================

def _ordenar_leitos(leitos: Iterable[LeitoNormalizado]) -> List[LeitoNormalizado]:
    return sorted(leitos, key=lambda leito: leito.codigo_leito)


def agrupar_quartos(
    setor: SetorNormalizado,
    leitos_do_setor: Iterable[LeitoNormalizado],
    quartos: Iterable[QuartoNormalizado]
) -> SetorEstruturado:
    """
    Agrupa os leitos de um setor em quartos.

    Enfermarias usam a chave implícita do código do leito (3 primeiros
    caracteres), restrita ao próprio setor. Os demais setores usam a
    lista explícita de leitos de cada quarto; leitos fora de qualquer
    lista ficam como leitos sem quarto.

    Args:
        setor: Setor a estruturar
        leitos_do_setor: Leitos cujo setor_id é o do setor
        quartos: Quartos cadastrados (filtrados pelo setor aqui)

    Returns:
        SetorEstruturado com quartos ordenados por nome
    """
    leitos_do_setor = list(leitos_do_setor)
    estrutura = SetorEstruturado(setor=setor)

    if setor.es_enfermaria:
        grupos: Dict[str, List[LeitoNormalizado]] = {}
        for leito in leitos_do_setor:
            grupos.setdefault(leito.chave_quarto, []).append(leito)

        for chave, leitos in grupos.items():
            estrutura.quartos.append(QuartoEstruturado(
                id=f"quarto-{setor.id}-{chave}",
                nome_quarto=f"Quarto {chave}",
                setor=setor,
                leitos=_ordenar_leitos(leitos),
                dinamico=True,
            ))
    else:
        por_id = {leito.id: leito for leito in leitos_do_setor}
        usados = set()
        for quarto in quartos:
            if quarto.setor_id and quarto.setor_id != setor.id:
                continue
            leitos = [por_id[leito_id] for leito_id in quarto.leitos_ids if leito_id in por_id]
            if not leitos:
                continue
            usados.update(leito.id for leito in leitos)
            estrutura.quartos.append(QuartoEstruturado(
                id=quarto.id,
                nome_quarto=quarto.nome_quarto or quarto.id,
                setor=setor,
                leitos=_ordenar_leitos(leitos),
            ))
        estrutura.leitos_sem_quarto = _ordenar_leitos(
            leito for leito in leitos_do_setor if leito.id not in usados
        )

    estrutura.quartos.sort(key=lambda quarto: quarto.nome_quarto)
    return estrutura


def montar_estrutura(
    setores: Iterable[SetorNormalizado],
    leitos: Iterable[LeitoNormalizado],
    quartos: Iterable[QuartoNormalizado]
) -> List[SetorEstruturado]:
    """Estrutura completa do hospital: setor -> quartos -> leitos."""
    leitos_por_setor: Dict[str, List[LeitoNormalizado]] = {}
    for leito in leitos:
        if leito.setor_id:
            leitos_por_setor.setdefault(leito.setor_id, []).append(leito)

    quartos = list(quartos)
    return [
        agrupar_quartos(setor, leitos_por_setor.get(setor.id, []), quartos)
        for setor in setores
    ]


# ============================================
# RESTRIÇÃO DE COORTE
# ============================================

def calcular_restricao_coorte(
    leitos_do_quarto: Iterable[LeitoNormalizado],
    ocupantes_por_leito: Mapping[str, PacienteNormalizado]
) -> Optional[RestricaoCoorte]:
    """
    Deriva a restrição de um quarto a partir dos ocupantes atuais.

    - Sem ocupantes: sem restrição
    - Sexos divergentes (ou nenhum sexo conhecido): sem restrição
    - Caso contrário: sexo único + união dos isolamentos ativos

    Returns:
        RestricaoCoorte ou None
    """
    sexos = set()
    isolamentos = set()
    possui_ocupante = False

    for leito in leitos_do_quarto:
        if not leito.ocupado:
            continue
        ocupante = ocupantes_por_leito.get(leito.id)
        if ocupante is None:
            continue
        possui_ocupante = True
        if ocupante.sexo:
            sexos.add(ocupante.sexo)
        isolamentos.update(chaves_isolamento_ativo(ocupante))

    if not possui_ocupante:
        return None

    if len(sexos) != 1:
        logger.debug(f"Quarto com sexos divergentes entre ocupantes ({len(sexos)}); sem restrição")
        return None

    return RestricaoCoorte(sexo=next(iter(sexos)), isolamentos=frozenset(isolamentos))


def aplicar_restricoes_coorte(
    quartos: Iterable[QuartoEstruturado],
    ocupantes_por_leito: Mapping[str, PacienteNormalizado]
) -> Dict[str, RestricaoCoorte]:
    """
    Calcula a restrição de cada leito Vago/Higienização dos quartos.

    Returns:
        Mapa leito_id -> restrição (leitos sem restrição não aparecem)
    """
    restricoes = {}
    for quarto in quartos:
        restricao = calcular_restricao_coorte(quarto.leitos, ocupantes_por_leito)
        if restricao is None:
            continue
        for leito in quarto.leitos:
            if leito.disponivel:
                restricoes[leito.id] = restricao
    return restricoes


def descrever_restricao(restricao: Optional[RestricaoCoorte]) -> dict:
    """
    Texto de compatibilidade de um leito livre e seus marcadores.

    Returns:
        {"compatibilidade": str, "badges": [str, ...]}
    """
    if restricao is None:
        return {"compatibilidade": "Livre", "badges": []}

    nome_sexo = _NOMES_SEXO.get(restricao.sexo, str(restricao.sexo))
    texto = f"Permitido apenas pacientes do sexo {nome_sexo}"
    badges = [nome_sexo]

    if restricao.isolamentos:
        siglas = sorted(restricao.isolamentos)
        texto += f" com isolamento de {', '.join(siglas)}"
        badges.extend(siglas)

    return {"compatibilidade": texto, "badges": badges}
