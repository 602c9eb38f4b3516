"""
Serviço de Normalização.
Limpa os registros brutos do armazenamento e enriquece os isolamentos
com o cadastro de infecções.

Falhas de consulta ao cadastro nunca descartam um isolamento: a entrada
é mantida com o identificador original e sem os metadados da infecção.

Localização: gestao_leitos/services/normalizacao_service.py
"""
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional
from pydantic import BaseModel
import asyncio
import logging

from gestao_leitos.core.exceptions import ValidationError
from gestao_leitos.schemas.normalizados import (
    IsolamentoNormalizado,
    LeitoNormalizado,
    PacienteNormalizado,
    QuartoNormalizado,
    SetorNormalizado,
    filtrar_isolamentos,
)
from gestao_leitos.utils.texto import texto_limpo

logger = logging.getLogger("gestao_leitos.normalizacao")

# Consulta assíncrona ao cadastro de infecções: id -> registro ou None
BuscarInfeccao = Callable[[str], Awaitable[Optional[Any]]]


def _como_dict(registro: Any) -> dict:
    """Converte um registro (linha SQLModel, schema ou mapeamento) em dict."""
    if isinstance(registro, BaseModel):
        return registro.model_dump()
    if isinstance(registro, Mapping):
        return dict(registro)
    raise ValidationError(f"Registro em formato não suportado: {type(registro).__name__}")


def _campo(registro: Any, *nomes: str) -> Optional[str]:
    for nome in nomes:
        if isinstance(registro, Mapping):
            valor = registro.get(nome)
        else:
            valor = getattr(registro, nome, None)
        valor = texto_limpo(valor)
        if valor:
            return valor
    return None


def mesclar_infeccao(isolamento: IsolamentoNormalizado, infeccao: Any) -> IsolamentoNormalizado:
    """
    Mescla os metadados do cadastro de infecção no isolamento.

    Os dados do cadastro têm prioridade sobre os do isolamento.

    Args:
        isolamento: Isolamento já normalizado
        infeccao: Registro da infecção (mapeamento ou objeto) ou None

    Returns:
        Novo isolamento com sigla/nome atualizados
    """
    if infeccao is None:
        return isolamento

    sigla = _campo(infeccao, "sigla_infeccao", "siglaInfeccao", "sigla") or isolamento.sigla
    nome = _campo(infeccao, "nome_infeccao", "nomeInfeccao", "nome") or isolamento.nome or sigla
    return isolamento.model_copy(update={"sigla": sigla, "nome": nome})


def normalizar_isolamentos(
    isolamentos: Any,
    infeccoes: Optional[Mapping[str, Any]] = None
) -> List[IsolamentoNormalizado]:
    """
    Normaliza a lista de isolamentos de um paciente.

    - descarta entradas vazias
    - resolve o id da infecção (direto ou referência embutida)
    - calcula status_considerado_ativo
    - mescla o cadastro de infecção quando encontrado
    """
    validados = [
        IsolamentoNormalizado.model_validate(iso)
        for iso in filtrar_isolamentos(isolamentos)
    ]
    if not infeccoes:
        return validados

    resultado = []
    for isolamento in validados:
        infeccao = infeccoes.get(isolamento.infeccao_id) if isolamento.infeccao_id else None
        if isolamento.infeccao_id and infeccao is None:
            logger.debug(f"Infecção {isolamento.infeccao_id} não encontrada no cadastro")
        resultado.append(mesclar_infeccao(isolamento, infeccao))
    return resultado


def normalizar_paciente(
    registro: Any,
    infeccoes: Optional[Mapping[str, Any]] = None
) -> PacienteNormalizado:
    """
    Normaliza um paciente usando um cadastro de infecções já carregado.

    Args:
        registro: Linha da tabela, dict do armazenamento ou paciente normalizado
        infeccoes: Mapa id -> infecção

    Returns:
        Paciente canônico
    """
    paciente = PacienteNormalizado.model_validate(_como_dict(registro))
    if infeccoes:
        paciente = paciente.model_copy(
            update={"isolamentos": normalizar_isolamentos(paciente.isolamentos, infeccoes)}
        )
    return paciente


def normalizar_leito(registro: Any) -> LeitoNormalizado:
    return LeitoNormalizado.model_validate(_como_dict(registro))


def normalizar_setor(registro: Any) -> SetorNormalizado:
    return SetorNormalizado.model_validate(_como_dict(registro))


def normalizar_quarto(registro: Any) -> QuartoNormalizado:
    return QuartoNormalizado.model_validate(_como_dict(registro))


# ============================================
# ENRIQUECIMENTO ASSÍNCRONO
# ============================================

async def _buscar_infeccao(infeccao_id: str, buscar_infeccao: BuscarInfeccao) -> Optional[Any]:
    try:
        return await buscar_infeccao(infeccao_id)
    except Exception as e:
        logger.warning(f"Erro ao buscar infecção {infeccao_id}: {e}")
        return None


async def enriquecer_isolamentos(
    isolamentos: Iterable[IsolamentoNormalizado],
    cache: Dict[str, Any],
    buscar_infeccao: Optional[BuscarInfeccao] = None
) -> List[IsolamentoNormalizado]:
    """
    Enriquece isolamentos consultando o cadastro de infecções.

    Usa o cache quando possível; as consultas faltantes rodam em paralelo
    e cada falha afeta apenas o próprio isolamento.

    Args:
        isolamentos: Isolamentos normalizados
        cache: Mapa id -> infecção, atualizado com os registros encontrados
        buscar_infeccao: Corrotina de consulta por id

    Returns:
        Isolamentos na mesma ordem, com metadados quando disponíveis
    """
    isolamentos = list(isolamentos)

    # Cada infecção ausente do cache é consultada uma única vez
    faltantes = list(dict.fromkeys(
        isolamento.infeccao_id
        for isolamento in isolamentos
        if isolamento.infeccao_id and cache.get(isolamento.infeccao_id) is None
    ))
    if faltantes and buscar_infeccao is not None:
        encontradas = await asyncio.gather(
            *(_buscar_infeccao(infeccao_id, buscar_infeccao) for infeccao_id in faltantes)
        )
        for infeccao_id, infeccao in zip(faltantes, encontradas):
            if infeccao is not None:
                cache[infeccao_id] = infeccao
            else:
                logger.debug(f"Infecção {infeccao_id} indisponível; isolamento mantido sem metadados")

    return [
        mesclar_infeccao(isolamento, cache.get(isolamento.infeccao_id) if isolamento.infeccao_id else None)
        for isolamento in isolamentos
    ]


async def processar_paciente(
    registro: Any,
    cache: Optional[Dict[str, Any]] = None,
    buscar_infeccao: Optional[BuscarInfeccao] = None
) -> Optional[PacienteNormalizado]:
    """
    Pipeline completo do paciente: estrutura + enriquecimento dos isolamentos.

    Returns:
        Paciente canônico ou None se o registro for vazio
    """
    if not registro:
        return None

    paciente = normalizar_paciente(registro)
    isolamentos = await enriquecer_isolamentos(
        paciente.isolamentos,
        cache if cache is not None else {},
        buscar_infeccao
    )
    return paciente.model_copy(update={"isolamentos": isolamentos})
