"""Migração inicial - cria as tabelas de gestão de leitos

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Cria todas as tabelas do sistema."""

    # Tabela Setor
    op.create_table(
        'setor',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('nome_setor', sa.String(), nullable=False),
        sa.Column('sigla_setor', sa.String(), nullable=True),
        sa.Column('tipo_setor', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_setor_tipo_setor', 'setor', ['tipo_setor'])

    # Tabela Quarto
    op.create_table(
        'quarto',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('nome_quarto', sa.String(), nullable=False),
        sa.Column('setor_id', sa.String(), nullable=False),
        sa.Column('leitos_ids', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['setor_id'], ['setor.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_quarto_setor_id', 'quarto', ['setor_id'])

    # Tabela Leito
    op.create_table(
        'leito',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('codigo_leito', sa.String(), nullable=False),
        sa.Column('setor_id', sa.String(), nullable=False),
        sa.Column('quarto_id', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('is_pcp', sa.Boolean(), nullable=False, default=False),
        sa.Column('historico', sa.JSON(), nullable=True),
        sa.Column('regulacao_em_andamento', sa.JSON(), nullable=True),
        sa.Column('reserva_externa', sa.JSON(), nullable=True),
        sa.Column('status_updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['setor_id'], ['setor.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_leito_codigo_leito', 'leito', ['codigo_leito'])
    op.create_index('ix_leito_setor_id', 'leito', ['setor_id'])
    op.create_index('ix_leito_status', 'leito', ['status'])

    # Tabela Paciente
    op.create_table(
        'paciente',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('nome_paciente', sa.String(), nullable=False),
        sa.Column('sexo', sa.String(), nullable=True),
        sa.Column('data_nascimento', sa.String(), nullable=True),
        sa.Column('leito_id', sa.String(), nullable=True),
        sa.Column('setor_id', sa.String(), nullable=True),
        sa.Column('setor_origem', sa.String(), nullable=True),
        sa.Column('isolamentos', sa.JSON(), nullable=True),
        sa.Column('regulacao_ativa', sa.JSON(), nullable=True),
        sa.Column('pedido_uti', sa.JSON(), nullable=True),
        sa.Column('pedido_remanejamento', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_paciente_leito_id', 'paciente', ['leito_id'])
    op.create_index('ix_paciente_setor_id', 'paciente', ['setor_id'])

    # Tabela Infecção
    op.create_table(
        'infeccao',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('sigla_infeccao', sa.String(), nullable=False),
        sa.Column('nome_infeccao', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_infeccao_sigla_infeccao', 'infeccao', ['sigla_infeccao'])

    # Tabela Histórico de Regulações
    op.create_table(
        'historico_regulacao',
        sa.Column('paciente_id', sa.String(), nullable=False),
        sa.Column('nome_paciente', sa.String(), nullable=True),
        sa.Column('leito_origem_id', sa.String(), nullable=True),
        sa.Column('setor_origem_id', sa.String(), nullable=True),
        sa.Column('data_inicio', sa.DateTime(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('status_final', sa.String(), nullable=True),
        sa.Column('data_conclusao', sa.DateTime(), nullable=True),
        sa.Column('user_name_conclusao', sa.String(), nullable=True),
        sa.Column('tempo_regulacao_minutos', sa.Integer(), nullable=True),
        sa.Column('leito_destino_final_id', sa.String(), nullable=True),
        sa.Column('setor_destino_final_id', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('paciente_id')
    )
    op.create_index('ix_historico_regulacao_status', 'historico_regulacao', ['status'])

    # Tabela Log de Auditoria
    op.create_table(
        'log_auditoria',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('acao', sa.String(), nullable=False),
        sa.Column('detalhes', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('user_name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_log_auditoria_timestamp', 'log_auditoria', ['timestamp'])
    op.create_index('ix_log_auditoria_acao', 'log_auditoria', ['acao'])


def downgrade() -> None:
    """Remove todas as tabelas."""
    op.drop_table('log_auditoria')
    op.drop_table('historico_regulacao')
    op.drop_table('infeccao')
    op.drop_table('paciente')
    op.drop_table('leito')
    op.drop_table('quarto')
    op.drop_table('setor')
