"""
Exceções personalizadas do sistema.
Fornece exceções semânticas para melhor tratamento de erros.
"""


class BaseAppException(Exception):
    """
    Exceção base da aplicação.
    Todas as exceções personalizadas herdam desta.
    """
    def __init__(self, message: str, code: str = "ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# ============================================
# ERROS DE VALIDAÇÃO
# ============================================

class ValidationError(BaseAppException):
    """Erro de validação de dados."""
    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR")


# ============================================
# ERROS DE NÃO ENCONTRADO
# ============================================

class NotFoundError(BaseAppException):
    """Recurso não encontrado."""
    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} com identificador '{identifier}' não encontrado",
            "NOT_FOUND"
        )
        self.resource = resource
        self.identifier = identifier


class PacienteNotFoundError(NotFoundError):
    """Paciente não encontrado."""
    def __init__(self, paciente_id: str):
        super().__init__("Paciente", paciente_id)


class LeitoNotFoundError(NotFoundError):
    """Leito não encontrado."""
    def __init__(self, leito_id: str):
        super().__init__("Leito", leito_id)


# ============================================
# ERROS DE REGULAÇÃO
# ============================================

class RegulacaoError(BaseAppException):
    """Erro ao aplicar uma operação de regulação."""
    def __init__(self, message: str, code: str = "REGULACAO_ERROR"):
        super().__init__(message, code)


class RegulacaoInativaError(RegulacaoError):
    """Paciente não possui regulação ativa."""
    def __init__(self, paciente_id: str):
        super().__init__(
            f"Paciente '{paciente_id}' não possui regulação ativa",
            "REGULACAO_INATIVA"
        )
        self.paciente_id = paciente_id


class TransacaoObrigatoriaError(RegulacaoError):
    """Operação exige uma transação fornecida pelo chamador."""
    def __init__(self, operacao: str = "concluir a regulação"):
        super().__init__(
            f"Uma transação é obrigatória para {operacao}",
            "TRANSACAO_OBRIGATORIA"
        )
