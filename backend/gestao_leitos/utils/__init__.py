"""
Utilitários compartilhados.
"""
