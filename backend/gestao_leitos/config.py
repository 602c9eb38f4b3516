"""
Configuração centralizada da aplicação.
Todas as configurações em um só lugar para fácil manutenção.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Configuração principal do sistema."""
    
    # ============================================
    # APLICAÇÃO
    # ============================================
    APP_TITLE: str = "Sistema de Gestão de Leitos Hospitalares"
    APP_DESCRIPTION: str = "Compatibilidade de leitos, isolamentos e regulação de pacientes"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"
    DEBUG: bool = False
    
    # ============================================
    # BANCO DE DADOS
    # ============================================
    DATABASE_URL: str = "sqlite:///./gestao_leitos.db"
    
    # ============================================
    # CORS
    # ============================================
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]
    
    # ============================================
    # REGRAS DE LEITO PCP
    # ============================================
    PCP_IDADE_MINIMA: int = 18
    PCP_IDADE_MAXIMA: int = 60
    PCP_ORIGENS_EXCLUIDAS: List[str] = ["CC - RECUPERAÇÃO"]
    
    # ============================================
    # RISCO DE CONTAMINAÇÃO
    # ============================================
    TIPOS_SETOR_ABERTOS: List[str] = ["Emergência"]
    SETORES_ABERTOS: List[str] = ["PS DECISÃO CLINICA", "PS DECISÃO CIRURGICA"]
    
    # ============================================
    # AUDITORIA
    # ============================================
    USUARIO_SISTEMA_NOME: str = "Usuário do Sistema"
    AUDITORIA_PAGINA_REGULACAO: str = "Regulação de Leitos"
    AUDITORIA_PAGINA_MAPA: str = "Mapa de Leitos"
    
    # ============================================
    # LOGGING
    # ============================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Instância global de configuração
settings = Settings()
