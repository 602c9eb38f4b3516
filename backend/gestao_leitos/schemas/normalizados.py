"""
Schemas canônicos dos registros lidos do armazenamento.

Aceitam tanto as chaves do armazenamento de documentos (camelCase, com
referências embutidas) quanto as colunas snake_case das tabelas, e
produzem registros planos com identificadores simples. Validar a saída
de um registro já normalizado produz o mesmo registro.
"""
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator, model_validator
from typing import Any, List, Optional
from collections.abc import Mapping

from gestao_leitos.models.enums import (
    SexoEnum,
    TipoSetorEnum,
    STATUS_LEITO_DISPONIVEL,
    STATUS_LEITO_OCUPADO,
)
from gestao_leitos.utils.normalizadores import (
    SEXO_PADRAO_INDEFINIDO,
    desembrulhar_referencia,
    normalizar_sexo,
    normalizar_sexo_binario,
    normalizar_status_isolamento,
    normalizar_status_leito,
    normalizar_tipo_setor,
    status_isolamento_ativo,
)
from gestao_leitos.utils.texto import texto_limpo, textos_equivalentes


def _alias(*nomes: str) -> AliasChoices:
    return AliasChoices(*nomes)


def _primeiro_preenchido(dados: dict, *chaves: str) -> Any:
    """Remove as chaves de dados e retorna o primeiro valor preenchido."""
    encontrado = None
    for chave in chaves:
        valor = dados.pop(chave, None)
        if encontrado is None and valor not in (None, ""):
            encontrado = valor
    return encontrado


# ============================================
# ISOLAMENTO
# ============================================

class IsolamentoNormalizado(BaseModel):
    """
    Isolamento de um paciente.

    O identificador da infecção pode vir direto ou como referência
    embutida. Campos desconhecidos (datas, observações) são mantidos.
    """
    model_config = ConfigDict(extra="allow")

    infeccao_id: Optional[str] = None
    status: Optional[str] = None
    sigla: Optional[str] = None
    nome: Optional[str] = None
    status_considerado_ativo: bool = False

    @model_validator(mode="before")
    @classmethod
    def resolver_campos(cls, dados: Any) -> Any:
        if not isinstance(dados, Mapping):
            return dados

        dados = dict(dados)
        referencia = _primeiro_preenchido(
            dados, "infeccao_id", "infeccaoId", "infecaoId", "idInfeccao", "infeccao"
        )
        dados["infeccao_id"] = desembrulhar_referencia(referencia)
        dados["sigla"] = _primeiro_preenchido(dados, "sigla", "siglaInfeccao", "sigla_infeccao")
        dados["nome"] = _primeiro_preenchido(dados, "nome", "nomeInfeccao", "nome_infeccao")
        dados.pop("statusConsideradoAtivo", None)

        dados["status"] = normalizar_status_isolamento(dados.get("status"))
        dados["status_considerado_ativo"] = status_isolamento_ativo(dados.get("status"))
        return dados

    @property
    def rotulo(self) -> str:
        """Chave do isolamento usada nas coortes (sigla ou nome, maiúsculo)."""
        return texto_limpo(self.sigla or self.nome).upper()


def filtrar_isolamentos(isolamentos: Any) -> list:
    """Descarta entradas vazias ou que não sejam documentos de isolamento."""
    if not isinstance(isolamentos, (list, tuple)):
        return []
    return [
        iso for iso in isolamentos
        if iso and isinstance(iso, (Mapping, IsolamentoNormalizado))
    ]


# ============================================
# DOCUMENTOS ANINHADOS DO PACIENTE
# ============================================

class RegulacaoAtiva(BaseModel):
    """Regulação em andamento de um paciente."""
    model_config = ConfigDict(extra="allow")

    leito_origem_id: Optional[str] = Field(default=None, validation_alias=_alias("leito_origem_id", "leitoOrigemId"))
    setor_origem_id: Optional[str] = Field(default=None, validation_alias=_alias("setor_origem_id", "setorOrigemId"))
    leito_destino_id: Optional[str] = Field(default=None, validation_alias=_alias("leito_destino_id", "leitoDestinoId"))
    setor_destino_id: Optional[str] = Field(default=None, validation_alias=_alias("setor_destino_id", "setorDestinoId"))
    iniciado_em: Any = Field(default=None, validation_alias=_alias("iniciado_em", "iniciadoEm", "timestamp"))
    nome_paciente: Optional[str] = Field(default=None, validation_alias=_alias("nome_paciente", "nomePaciente", "pacienteNome"))

    @field_validator("leito_origem_id", "setor_origem_id", "leito_destino_id", "setor_destino_id", mode="before")
    @classmethod
    def desembrulhar(cls, v):
        return desembrulhar_referencia(v)


class PedidoUTI(BaseModel):
    """Pedido de vaga de UTI pendente."""
    model_config = ConfigDict(extra="allow")

    solicitado_em: Any = Field(default=None, validation_alias=_alias("solicitado_em", "solicitadoEm"))


# ============================================
# PACIENTE
# ============================================

class PacienteNormalizado(BaseModel):
    """
    Paciente em forma canônica.

    - sexo restrito a M/F (ver normalizar_sexo_binario)
    - sexo_exibicao preserva o rótulo original (ver normalizar_sexo)
    - leito_id e setor_id como identificadores simples
    - isolamentos sempre lista, sem entradas vazias
    """
    model_config = ConfigDict(extra="ignore")

    id: str
    nome_paciente: str = Field(default="", validation_alias=_alias("nome_paciente", "nomePaciente", "nome"))
    sexo: SexoEnum = SEXO_PADRAO_INDEFINIDO
    sexo_exibicao: Optional[str] = Field(default=None, validation_alias=_alias("sexo_exibicao", "sexoExibicao"))
    data_nascimento: Any = Field(default=None, validation_alias=_alias("data_nascimento", "dataNascimento"))
    leito_id: Optional[str] = Field(default=None, validation_alias=_alias("leito_id", "leitoId"))
    setor_id: Optional[str] = Field(default=None, validation_alias=_alias("setor_id", "setorId"))
    setor_origem: Optional[str] = Field(default=None, validation_alias=_alias("setor_origem", "setorOrigem"))
    isolamentos: List[IsolamentoNormalizado] = Field(default_factory=list)
    regulacao_ativa: Optional[RegulacaoAtiva] = Field(default=None, validation_alias=_alias("regulacao_ativa", "regulacaoAtiva"))
    pedido_uti: Optional[PedidoUTI] = Field(default=None, validation_alias=_alias("pedido_uti", "pedidoUTI"))
    pedido_remanejamento: Optional[dict] = Field(default=None, validation_alias=_alias("pedido_remanejamento", "pedidoRemanejamento"))

    @model_validator(mode="before")
    @classmethod
    def preencher_sexo_exibicao(cls, dados: Any) -> Any:
        if not isinstance(dados, Mapping) or "sexo_exibicao" in dados or "sexoExibicao" in dados:
            return dados
        dados = dict(dados)
        dados["sexo_exibicao"] = normalizar_sexo(dados.get("sexo"))
        return dados

    @field_validator("id", mode="before")
    @classmethod
    def validar_id(cls, v):
        return desembrulhar_referencia(v)

    @field_validator("nome_paciente", mode="before")
    @classmethod
    def validar_nome(cls, v):
        return texto_limpo(v)

    @field_validator("sexo", mode="before")
    @classmethod
    def validar_sexo(cls, v):
        return normalizar_sexo_binario(v)

    @field_validator("leito_id", "setor_id", mode="before")
    @classmethod
    def desembrulhar(cls, v):
        return desembrulhar_referencia(v)

    @field_validator("setor_origem", mode="before")
    @classmethod
    def validar_setor_origem(cls, v):
        if isinstance(v, Mapping):
            v = v.get("nomeSetor") or v.get("nome_setor") or v.get("nome")
        return texto_limpo(v) or None

    @field_validator("isolamentos", mode="before")
    @classmethod
    def validar_isolamentos(cls, v):
        return filtrar_isolamentos(v)

    @field_validator("regulacao_ativa", "pedido_uti", "pedido_remanejamento", mode="before")
    @classmethod
    def vazio_para_none(cls, v):
        return v or None


# ============================================
# ESTRUTURA FÍSICA
# ============================================

class SetorNormalizado(BaseModel):
    """Setor em forma canônica."""
    model_config = ConfigDict(extra="ignore")

    id: str
    nome_setor: str = Field(default="", validation_alias=_alias("nome_setor", "nomeSetor", "nome"))
    sigla_setor: Optional[str] = Field(default=None, validation_alias=_alias("sigla_setor", "siglaSetor"))
    tipo_setor: str = Field(default=TipoSetorEnum.OUTROS.value, validation_alias=_alias("tipo_setor", "tipoSetor"))

    @field_validator("id", mode="before")
    @classmethod
    def validar_id(cls, v):
        return desembrulhar_referencia(v)

    @field_validator("nome_setor", mode="before")
    @classmethod
    def validar_nome(cls, v):
        return texto_limpo(v)

    @field_validator("sigla_setor", mode="before")
    @classmethod
    def validar_sigla(cls, v):
        return texto_limpo(v) or None

    @field_validator("tipo_setor", mode="before")
    @classmethod
    def validar_tipo(cls, v):
        return normalizar_tipo_setor(v)

    @property
    def nome_exibicao(self) -> str:
        return self.nome_setor or self.sigla_setor or "Setor sem nome"

    @property
    def es_enfermaria(self) -> bool:
        return textos_equivalentes(self.tipo_setor, TipoSetorEnum.ENFERMARIA.value)

    @property
    def es_uti(self) -> bool:
        return textos_equivalentes(self.tipo_setor, TipoSetorEnum.UTI.value)


class QuartoNormalizado(BaseModel):
    """Quarto com lista explícita de leitos."""
    model_config = ConfigDict(extra="ignore")

    id: str
    nome_quarto: str = Field(default="", validation_alias=_alias("nome_quarto", "nomeQuarto", "nome"))
    setor_id: Optional[str] = Field(default=None, validation_alias=_alias("setor_id", "setorId"))
    leitos_ids: List[str] = Field(default_factory=list, validation_alias=_alias("leitos_ids", "leitosIds"))

    @field_validator("id", "setor_id", mode="before")
    @classmethod
    def desembrulhar(cls, v):
        return desembrulhar_referencia(v)

    @field_validator("nome_quarto", mode="before")
    @classmethod
    def validar_nome(cls, v):
        return texto_limpo(v)

    @field_validator("leitos_ids", mode="before")
    @classmethod
    def validar_leitos(cls, v):
        if not isinstance(v, (list, tuple, set)):
            return []
        ids = (desembrulhar_referencia(item) for item in v)
        return [leito_id for leito_id in ids if leito_id]


class LeitoNormalizado(BaseModel):
    """
    Leito em forma canônica.

    nome_setor e sigla_setor são preenchidos pelo carregamento do
    retrato hospitalar para compor descrições.
    """
    model_config = ConfigDict(extra="ignore")

    id: str
    codigo_leito: str = Field(default="", validation_alias=_alias("codigo_leito", "codigoLeito", "codigo"))
    setor_id: Optional[str] = Field(default=None, validation_alias=_alias("setor_id", "setorId"))
    quarto_id: Optional[str] = Field(default=None, validation_alias=_alias("quarto_id", "quartoId"))
    status: str = Field(default="", validation_alias=_alias("status", "statusLeito"))
    is_pcp: bool = Field(default=False, validation_alias=_alias("is_pcp", "isPCP"))
    regulacao_em_andamento: Optional[dict] = Field(
        default=None, validation_alias=_alias("regulacao_em_andamento", "regulacaoEmAndamento")
    )
    reserva_externa: Optional[dict] = Field(default=None, validation_alias=_alias("reserva_externa", "reservaExterna"))
    historico: List[dict] = Field(default_factory=list)
    nome_setor: Optional[str] = Field(default=None, validation_alias=_alias("nome_setor", "nomeSetor"))
    sigla_setor: Optional[str] = Field(default=None, validation_alias=_alias("sigla_setor", "siglaSetor"))

    @field_validator("id", "setor_id", "quarto_id", mode="before")
    @classmethod
    def desembrulhar(cls, v):
        return desembrulhar_referencia(v)

    @field_validator("codigo_leito", mode="before")
    @classmethod
    def validar_codigo(cls, v):
        return texto_limpo(v)

    @field_validator("status", mode="before")
    @classmethod
    def validar_status(cls, v):
        return normalizar_status_leito(v)

    @field_validator("is_pcp", mode="before")
    @classmethod
    def validar_pcp(cls, v):
        return bool(v)

    @field_validator("regulacao_em_andamento", "reserva_externa", mode="before")
    @classmethod
    def vazio_para_none(cls, v):
        return v or None

    @field_validator("historico", mode="before")
    @classmethod
    def validar_historico(cls, v):
        if not isinstance(v, (list, tuple)):
            return []
        return [dict(item) for item in v if isinstance(item, Mapping)]

    @property
    def disponivel(self) -> bool:
        """Leito Vago ou em Higienização."""
        return self.status in STATUS_LEITO_DISPONIVEL

    @property
    def ocupado(self) -> bool:
        """Leito Ocupado ou Regulado."""
        return self.status in STATUS_LEITO_OCUPADO

    @property
    def chave_quarto(self) -> str:
        """Chave implícita do quarto nas enfermarias (3 primeiros caracteres)."""
        return (self.codigo_leito[:3] or "---").upper()

    @property
    def descricao(self) -> str:
        setor = self.sigla_setor or self.nome_setor or "N/A"
        return f"{setor} - {self.codigo_leito or 'N/A'}"
