"""
Tests de conclusão de regulação.
"""
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from gestao_leitos.core.exceptions import (
    LeitoNotFoundError,
    PacienteNotFoundError,
    RegulacaoError,
    RegulacaoInativaError,
    TransacaoObrigatoriaError,
)
from gestao_leitos.models.auditoria import LogAuditoria
from gestao_leitos.models.enums import StatusLeitoEnum, StatusRegulacaoEnum, TipoSetorEnum
from gestao_leitos.models.historico_regulacao import HistoricoRegulacao
from gestao_leitos.models.leito import Leito
from gestao_leitos.models.paciente import Paciente
from gestao_leitos.services.regulacao_service import RegulacaoService, concluir_regulacao

INICIO = datetime(2024, 5, 10, 8, 0)
CONCLUSAO = INICIO + timedelta(minutes=42)


@pytest.fixture
def cenario(criar_setor, criar_leito, criar_paciente):
    """Paciente no leito A (Clínica Médica) regulado para o leito B."""
    setor = criar_setor(nome_setor="Clínica Médica", sigla_setor="CM")
    origem = criar_leito(setor.id, codigo_leito="101A", status=StatusLeitoEnum.OCUPADO.value)
    destino = criar_leito(setor.id, codigo_leito="205B", status=StatusLeitoEnum.REGULADO.value)
    paciente = criar_paciente(
        nome_paciente="Maria Souza",
        leito=origem,
        regulacao_ativa={
            "leitoOrigemId": origem.id,
            "setorOrigemId": setor.id,
            "leitoDestinoId": {"id": destino.id},
            "setorDestinoId": setor.id,
            "iniciadoEm": INICIO.isoformat(),
        },
    )
    return {"setor": setor, "origem": origem, "destino": destino, "paciente": paciente}


class TestProtocoloConclusao:
    """Tests do protocolo executado dentro da transação do chamador."""

    def test_conclusao_completa(self, session, cenario):
        paciente = cenario["paciente"]

        resultado = concluir_regulacao(
            session, paciente, data_referencia=CONCLUSAO, usuario_nome="Enf. Ana"
        )
        session.commit()

        assert resultado.tempo_regulacao_minutos == 42
        assert resultado.leito_destino_id == cenario["destino"].id
        assert resultado.setor_destino_id == cenario["setor"].id

        paciente = session.get(Paciente, paciente.id)
        assert paciente.regulacao_ativa is None
        assert paciente.leito_id == cenario["destino"].id
        assert paciente.setor_id == cenario["setor"].id

        origem = session.get(Leito, cenario["origem"].id)
        destino = session.get(Leito, cenario["destino"].id)
        assert origem.status == StatusLeitoEnum.HIGIENIZACAO.value
        assert destino.status == StatusLeitoEnum.OCUPADO.value
        assert origem.historico == [
            {"status": StatusLeitoEnum.HIGIENIZACAO.value, "timestamp": CONCLUSAO.isoformat()}
        ]
        assert destino.historico[-1]["status"] == StatusLeitoEnum.OCUPADO.value

    def test_mensagem_de_auditoria(self, session, cenario):
        resultado = concluir_regulacao(
            session, cenario["paciente"], data_referencia=CONCLUSAO, usuario_nome="Enf. Ana"
        )

        assert resultado.log_entries == [
            "Regulação para o paciente 'Maria Souza' (do leito CM - 101A para CM - 205B) "
            "foi concluída por Enf. Ana em 42 minutos."
        ]

    def test_sem_transacao(self, cenario):
        with pytest.raises(TransacaoObrigatoriaError):
            concluir_regulacao(None, cenario["paciente"])

    def test_sem_regulacao_ativa(self, session, criar_paciente):
        paciente = criar_paciente(nome_paciente="Sem Regulação")

        with pytest.raises(RegulacaoInativaError):
            concluir_regulacao(session, paciente)

    def test_inicio_invalido(self, session, cenario):
        paciente = cenario["paciente"]
        paciente.regulacao_ativa = {**paciente.regulacao_ativa, "iniciadoEm": "ontem"}

        resultado = concluir_regulacao(session, paciente, data_referencia=CONCLUSAO)

        assert resultado.tempo_regulacao_minutos is None
        assert resultado.log_entries[0].endswith("(tempo de regulação indisponível).")

    def test_leitos_adicionais_liberados(self, session, cenario, criar_leito):
        extra = criar_leito(cenario["setor"].id, codigo_leito="301A", status=StatusLeitoEnum.RESERVADO.value)

        resultado = concluir_regulacao(
            session, cenario["paciente"], leitos_liberar=[extra, extra], data_referencia=CONCLUSAO
        )
        session.commit()

        assert session.get(Leito, extra.id).status == StatusLeitoEnum.VAGO.value
        assert len(session.get(Leito, extra.id).historico) == 1
        assert resultado.leitos_envolvidos == [
            cenario["origem"].id, cenario["destino"].id, extra.id
        ]

    def test_leito_destino_inexistente(self, session, cenario):
        paciente = cenario["paciente"]
        paciente.regulacao_ativa = {**paciente.regulacao_ativa, "leitoDestinoId": "nao-existe"}

        with pytest.raises(LeitoNotFoundError):
            concluir_regulacao(session, paciente)

    def test_historico_mesclado(self, session, cenario):
        paciente = cenario["paciente"]
        session.add(HistoricoRegulacao(
            paciente_id=paciente.id,
            nome_paciente="Maria Souza",
            leito_origem_id=cenario["origem"].id,
            data_inicio=INICIO,
        ))
        session.commit()

        concluir_regulacao(session, paciente, data_referencia=CONCLUSAO, usuario_nome="Enf. Ana")
        session.commit()

        historico = session.get(HistoricoRegulacao, paciente.id)
        assert historico.status == StatusRegulacaoEnum.CONCLUIDA.value
        assert historico.status_final == StatusRegulacaoEnum.CONCLUIDA.value
        assert historico.data_inicio == INICIO
        assert historico.leito_origem_id == cenario["origem"].id
        assert historico.leito_destino_final_id == cenario["destino"].id
        assert historico.tempo_regulacao_minutos == 42
        assert historico.user_name_conclusao == "Enf. Ana"

    def test_historico_criado_quando_ausente(self, session, cenario):
        concluir_regulacao(session, cenario["paciente"], data_referencia=CONCLUSAO)
        session.commit()

        historico = session.get(HistoricoRegulacao, cenario["paciente"].id)
        assert historico.nome_paciente == "Maria Souza"
        assert historico.setor_origem_id == cenario["setor"].id
        assert historico.user_name_conclusao == "Usuário do Sistema"


class TestDestinoUTI:
    """Tests do atendimento do pedido de UTI."""

    def test_pedido_uti_atendido(self, session, criar_setor, criar_leito, criar_paciente):
        enfermaria = criar_setor(nome_setor="Clínica Médica", sigla_setor="CM")
        uti = criar_setor(nome_setor="UTI Adulto", tipo_setor=TipoSetorEnum.UTI.value, sigla_setor="UTI")
        origem = criar_leito(enfermaria.id, codigo_leito="101A", status=StatusLeitoEnum.OCUPADO.value)
        destino = criar_leito(uti.id, codigo_leito="U01", status=StatusLeitoEnum.REGULADO.value)
        paciente = criar_paciente(
            nome_paciente="João Lima",
            sexo="M",
            leito=origem,
            pedido_uti={"solicitadoEm": (INICIO - timedelta(minutes=90)).isoformat()},
            regulacao_ativa={
                "leitoOrigemId": origem.id,
                "leitoDestinoId": destino.id,
                "iniciadoEm": INICIO.isoformat(),
            },
        )

        resultado = concluir_regulacao(session, paciente, data_referencia=CONCLUSAO)
        session.commit()

        assert session.get(Paciente, paciente.id).pedido_uti is None
        assert resultado.setor_destino_id == uti.id
        assert resultado.log_entries[1] == (
            "Pedido de UTI do paciente 'João Lima' foi atendido. Tempo de espera: 132 minutos."
        )

    def test_pedido_mantido_fora_da_uti(self, session, cenario):
        paciente = cenario["paciente"]
        paciente.pedido_uti = {"solicitadoEm": INICIO.isoformat()}

        resultado = concluir_regulacao(session, paciente, data_referencia=CONCLUSAO)

        assert paciente.pedido_uti is not None
        assert len(resultado.log_entries) == 1


class TestRegulacaoService:
    """Tests do serviço transacional."""

    def test_concluir_grava_e_audita(self, session, cenario):
        service = RegulacaoService(session)

        resultado = service.concluir(
            cenario["paciente"].id, usuario_nome="Enf. Ana", data_referencia=CONCLUSAO
        )

        assert resultado.tempo_regulacao_minutos == 42
        assert session.get(Paciente, cenario["paciente"].id).regulacao_ativa is None

        logs = session.exec(select(LogAuditoria)).all()
        assert [log.detalhes for log in logs] == resultado.log_entries
        assert logs[0].acao == "Regulação de Leitos"
        assert logs[0].user_name == "Enf. Ana"

    def test_segunda_conclusao_falha(self, session, cenario):
        service = RegulacaoService(session)
        service.concluir(cenario["paciente"].id, data_referencia=CONCLUSAO)

        with pytest.raises(RegulacaoInativaError):
            service.concluir(cenario["paciente"].id, data_referencia=CONCLUSAO)

    def test_paciente_inexistente(self, session):
        with pytest.raises(PacienteNotFoundError):
            RegulacaoService(session).concluir("nao-existe")

    def test_leito_adicional_inexistente_nao_altera_nada(self, session, cenario):
        with pytest.raises(LeitoNotFoundError):
            RegulacaoService(session).concluir(cenario["paciente"].id, leitos_liberar_ids=["nao-existe"])

        paciente = session.get(Paciente, cenario["paciente"].id)
        assert paciente.regulacao_ativa is not None
        assert session.get(Leito, cenario["origem"].id).status == StatusLeitoEnum.OCUPADO.value

    def test_falha_de_banco_desfaz_transacao(self, session, cenario, monkeypatch):
        def falhar():
            raise OperationalError("UPDATE paciente", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "commit", falhar)

        with pytest.raises(RegulacaoError) as exc_info:
            RegulacaoService(session).concluir(cenario["paciente"].id, data_referencia=CONCLUSAO)

        assert exc_info.value.code == "REGULACAO_ERROR"
        monkeypatch.undo()
        assert session.get(Paciente, cenario["paciente"].id).regulacao_ativa is not None
        assert session.exec(select(LogAuditoria)).all() == []

    def test_falha_na_auditoria_nao_desfaz_conclusao(self, session, cenario, monkeypatch):
        adicionar = session.add

        def adicionar_sem_auditoria(objeto, *args, **kwargs):
            if isinstance(objeto, LogAuditoria):
                raise OperationalError("INSERT log_auditoria", {}, Exception("disk I/O error"))
            return adicionar(objeto, *args, **kwargs)

        monkeypatch.setattr(session, "add", adicionar_sem_auditoria)

        resultado = RegulacaoService(session).concluir(cenario["paciente"].id, data_referencia=CONCLUSAO)

        assert resultado.tempo_regulacao_minutos == 42
        assert resultado.log_entries
        monkeypatch.undo()
        assert session.get(Paciente, cenario["paciente"].id).regulacao_ativa is None
        assert session.get(Leito, cenario["origem"].id).status == StatusLeitoEnum.HIGIENIZACAO.value
        assert session.exec(select(LogAuditoria)).all() == []
