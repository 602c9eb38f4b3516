"""
Serviço de Compatibilidade de Leitos.
Determina quais leitos livres podem receber um paciente.

Regras para enfermaria (aplicadas em ordem):
1. Leito PCP: paciente entre 18 e 60 anos, sem isolamento ativo e sem
   origem no CC - Recuperação
2. Coorte do quarto: sexo dos ocupantes e conjunto exato de isolamentos

Na UTI apenas o tipo de setor e o status do leito são considerados.

Localização: gestao_leitos/services/compatibilidade_service.py
"""
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union
from dataclasses import dataclass, field
from datetime import date
import logging

from gestao_leitos.config import settings
from gestao_leitos.models.enums import ModoBuscaEnum, TIPO_SETOR_POR_MODO
from gestao_leitos.schemas.normalizados import (
    LeitoNormalizado,
    PacienteNormalizado,
    SetorNormalizado,
)
from gestao_leitos.services.coorte_service import chaves_isolamento_ativo, mapear_ocupantes
from gestao_leitos.utils.datas import calcular_idade
from gestao_leitos.utils.texto import normalizar_texto, textos_equivalentes

logger = logging.getLogger("gestao_leitos.compatibilidade")


# Motivos de rejeição usados no relatório
REJEICAO_PCP = "pcp"
REJEICAO_SEXO = "sexo"
REJEICAO_ISOLAMENTO = "isolamento"


@dataclass
class RegraCompatibilidade:
    """Leitos rejeitados por uma regra, com a explicação."""
    regra: str
    mensagem: str
    leitos: List[LeitoNormalizado] = field(default_factory=list)


@dataclass
class RelatorioCompatibilidade:
    """Detalhamento da busca de leitos para um paciente."""
    paciente_id: str
    modo: ModoBuscaEnum
    idade: int
    isolamentos: List[str]
    motivos_pcp: List[str]
    compativeis: List[LeitoNormalizado] = field(default_factory=list)
    por_pcp: Optional[RegraCompatibilidade] = None
    por_sexo: Optional[RegraCompatibilidade] = None
    por_isolamento: Optional[RegraCompatibilidade] = None


# ============================================
# REGRA PCP
# ============================================

def motivos_inelegibilidade_pcp(
    paciente: PacienteNormalizado,
    referencia: Optional[date] = None
) -> List[str]:
    """
    Motivos que impedem o paciente de ocupar um leito PCP.

    Args:
        paciente: Paciente normalizado
        referencia: Data de referência para a idade (padrão: hoje)

    Returns:
        Lista vazia se o paciente for elegível
    """
    motivos = []
    idade = calcular_idade(paciente.data_nascimento, referencia)

    if idade < settings.PCP_IDADE_MINIMA:
        motivos.append(f"Idade {idade} abaixo de {settings.PCP_IDADE_MINIMA} anos")
    elif idade > settings.PCP_IDADE_MAXIMA:
        motivos.append(f"Idade {idade} acima de {settings.PCP_IDADE_MAXIMA} anos")

    if chaves_isolamento_ativo(paciente):
        motivos.append("Paciente com isolamento ativo")

    origens_excluidas = {normalizar_texto(origem) for origem in settings.PCP_ORIGENS_EXCLUIDAS}
    if paciente.setor_origem and normalizar_texto(paciente.setor_origem) in origens_excluidas:
        motivos.append(f"Origem {paciente.setor_origem}")

    return motivos


# ============================================
# AVALIAÇÃO DE LEITOS
# ============================================

def _modo(modo: Union[ModoBuscaEnum, str]) -> ModoBuscaEnum:
    if isinstance(modo, ModoBuscaEnum):
        return modo
    return ModoBuscaEnum(normalizar_texto(modo))


def _candidatos(
    leitos: Iterable[LeitoNormalizado],
    setores_por_id: Dict[str, SetorNormalizado],
    modo: ModoBuscaEnum
) -> List[LeitoNormalizado]:
    """Leitos Vago/Higienização em setores do tipo correspondente ao modo."""
    tipo_alvo = TIPO_SETOR_POR_MODO[modo].value
    candidatos = []
    for leito in leitos:
        if not leito.disponivel:
            continue
        setor = setores_por_id.get(leito.setor_id)
        if setor is None or not textos_equivalentes(setor.tipo_setor, tipo_alvo):
            continue
        candidatos.append(leito)
    return candidatos


def _ocupantes_do_quarto(
    leito: LeitoNormalizado,
    leitos: List[LeitoNormalizado],
    ocupantes_por_leito: Dict[str, PacienteNormalizado],
    paciente_id: str
) -> List[PacienteNormalizado]:
    """Ocupantes dos outros leitos do mesmo quarto, sem o próprio paciente."""
    ocupantes = []
    for outro in leitos:
        if outro.id == leito.id or outro.setor_id != leito.setor_id:
            continue
        if outro.chave_quarto != leito.chave_quarto:
            continue
        ocupante = ocupantes_por_leito.get(outro.id)
        if ocupante is not None and ocupante.id != paciente_id:
            ocupantes.append(ocupante)
    return ocupantes


def _avaliar_coorte(
    paciente: PacienteNormalizado,
    chaves_paciente: FrozenSet[str],
    ocupantes: List[PacienteNormalizado]
) -> Optional[str]:
    sexos = {ocupante.sexo for ocupante in ocupantes}
    if len(sexos) == 1 and paciente.sexo not in sexos:
        return REJEICAO_SEXO

    chaves_quarto = set()
    for ocupante in ocupantes:
        chaves_quarto.update(chaves_isolamento_ativo(ocupante))

    if chaves_quarto:
        if chaves_paciente != chaves_quarto:
            return REJEICAO_ISOLAMENTO
    elif chaves_paciente and ocupantes:
        return REJEICAO_ISOLAMENTO

    return None


def _avaliar_enfermaria(
    paciente: PacienteNormalizado,
    leitos: List[LeitoNormalizado],
    candidatos: List[LeitoNormalizado],
    ocupantes_por_leito: Dict[str, PacienteNormalizado],
    referencia: Optional[date]
) -> List[Tuple[LeitoNormalizado, Optional[str]]]:
    """Avalia cada candidato de enfermaria e devolve (leito, motivo de rejeição)."""
    chaves_paciente = chaves_isolamento_ativo(paciente)
    motivos_pcp = motivos_inelegibilidade_pcp(paciente, referencia)

    avaliacoes = []
    for leito in candidatos:
        if leito.is_pcp and motivos_pcp:
            avaliacoes.append((leito, REJEICAO_PCP))
            continue
        ocupantes = _ocupantes_do_quarto(leito, leitos, ocupantes_por_leito, paciente.id)
        avaliacoes.append((leito, _avaliar_coorte(paciente, chaves_paciente, ocupantes)))
    return avaliacoes


def _avaliar(
    paciente: PacienteNormalizado,
    leitos: Iterable[LeitoNormalizado],
    setores: Iterable[SetorNormalizado],
    pacientes: Iterable[PacienteNormalizado],
    modo: ModoBuscaEnum,
    referencia: Optional[date]
) -> List[Tuple[LeitoNormalizado, Optional[str]]]:
    leitos = list(leitos)
    setores_por_id = {setor.id: setor for setor in setores}
    candidatos = _candidatos(leitos, setores_por_id, modo)

    if modo == ModoBuscaEnum.UTI:
        return [(leito, None) for leito in candidatos]

    # Só contam como ocupantes os pacientes em leitos Ocupado/Regulado
    leitos_ocupados = {leito.id for leito in leitos if leito.ocupado}
    ocupantes_por_leito = {
        leito_id: ocupante
        for leito_id, ocupante in mapear_ocupantes(pacientes).items()
        if leito_id in leitos_ocupados
    }
    return _avaliar_enfermaria(paciente, leitos, candidatos, ocupantes_por_leito, referencia)


def encontrar_leitos_compativeis(
    paciente: PacienteNormalizado,
    leitos: Iterable[LeitoNormalizado],
    setores: Iterable[SetorNormalizado],
    pacientes: Iterable[PacienteNormalizado],
    modo: Union[ModoBuscaEnum, str] = ModoBuscaEnum.ENFERMARIA,
    referencia: Optional[date] = None
) -> List[LeitoNormalizado]:
    """
    Lista os leitos que podem receber o paciente.

    Args:
        paciente: Paciente alvo (normalizado)
        leitos: Todos os leitos do hospital
        setores: Todos os setores
        pacientes: Todos os pacientes (para resolver ocupantes)
        modo: 'enfermaria' ou 'uti'
        referencia: Data de referência para a idade

    Returns:
        Leitos compatíveis na ordem recebida
    """
    modo = _modo(modo)
    avaliacoes = _avaliar(paciente, leitos, setores, pacientes, modo, referencia)
    compativeis = [leito for leito, motivo in avaliacoes if motivo is None]
    logger.debug(
        f"Paciente {paciente.id}: {len(compativeis)} de {len(avaliacoes)} leitos "
        f"compatíveis ({modo.value})"
    )
    return compativeis


def gerar_relatorio_compatibilidade(
    paciente: PacienteNormalizado,
    leitos: Iterable[LeitoNormalizado],
    setores: Iterable[SetorNormalizado],
    pacientes: Iterable[PacienteNormalizado],
    modo: Union[ModoBuscaEnum, str] = ModoBuscaEnum.ENFERMARIA,
    referencia: Optional[date] = None
) -> RelatorioCompatibilidade:
    """
    Mesma busca de encontrar_leitos_compativeis, agrupando os leitos
    rejeitados pela regra que os excluiu.
    """
    modo = _modo(modo)
    avaliacoes = _avaliar(paciente, leitos, setores, pacientes, modo, referencia)
    chaves = sorted(chaves_isolamento_ativo(paciente))

    relatorio = RelatorioCompatibilidade(
        paciente_id=paciente.id,
        modo=modo,
        idade=calcular_idade(paciente.data_nascimento, referencia),
        isolamentos=chaves,
        motivos_pcp=motivos_inelegibilidade_pcp(paciente, referencia),
        compativeis=[leito for leito, motivo in avaliacoes if motivo is None],
    )

    rejeitados = {REJEICAO_PCP: [], REJEICAO_SEXO: [], REJEICAO_ISOLAMENTO: []}
    for leito, motivo in avaliacoes:
        if motivo is not None:
            rejeitados[motivo].append(leito)

    if rejeitados[REJEICAO_PCP]:
        relatorio.por_pcp = RegraCompatibilidade(
            regra=REJEICAO_PCP,
            mensagem="Paciente inelegível para leitos PCP: " + "; ".join(relatorio.motivos_pcp),
            leitos=rejeitados[REJEICAO_PCP],
        )
    if rejeitados[REJEICAO_SEXO]:
        relatorio.por_sexo = RegraCompatibilidade(
            regra=REJEICAO_SEXO,
            mensagem="Quarto ocupado por pacientes de outro sexo",
            leitos=rejeitados[REJEICAO_SEXO],
        )
    if rejeitados[REJEICAO_ISOLAMENTO]:
        descricao = ", ".join(chaves) if chaves else "nenhum"
        relatorio.por_isolamento = RegraCompatibilidade(
            regra=REJEICAO_ISOLAMENTO,
            mensagem=f"Isolamentos do quarto diferentes dos do paciente ({descricao})",
            leitos=rejeitados[REJEICAO_ISOLAMENTO],
        )

    return relatorio
