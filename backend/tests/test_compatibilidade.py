"""
Tests de compatibilidade de leitos.
"""
from datetime import date

import pytest

from gestao_leitos.models.enums import ModoBuscaEnum
from gestao_leitos.schemas.normalizados import LeitoNormalizado, PacienteNormalizado, SetorNormalizado
from gestao_leitos.services.compatibilidade_service import (
    encontrar_leitos_compativeis,
    gerar_relatorio_compatibilidade,
    motivos_inelegibilidade_pcp,
)

REFERENCIA = date(2024, 5, 10)

SETORES = [
    SetorNormalizado(id="ENF", nome_setor="Clínica Médica", tipo_setor="Enfermaria"),
    SetorNormalizado(id="UTI", nome_setor="UTI Adulto", tipo_setor="UTI"),
    SetorNormalizado(id="PS", nome_setor="PS Decisão Clínica", tipo_setor="Emergência"),
]


def leito(id, codigo, status="Vago", setor_id="ENF", is_pcp=False):
    return LeitoNormalizado(id=id, codigo_leito=codigo, status=status, setor_id=setor_id, is_pcp=is_pcp)


def paciente(id, sexo="F", nascimento="10/05/1980", leito_id=None, isolamentos=(), origem=None):
    return PacienteNormalizado.model_validate({
        "id": id,
        "nomePaciente": f"Paciente {id}",
        "sexo": sexo,
        "dataNascimento": nascimento,
        "leitoId": leito_id,
        "setorOrigem": origem,
        "isolamentos": [
            {"infeccaoId": sigla.lower(), "siglaInfeccao": sigla, "status": "Confirmado"}
            for sigla in isolamentos
        ],
    })


def ids(leitos):
    return [l.id for l in leitos]


class TestModoUTI:
    """Tests da busca em modo UTI."""

    def test_uti_ignora_regras_de_coorte(self):
        leitos = [
            leito("u1", "U01", setor_id="UTI"),
            leito("u2", "U02", status="Higienização", setor_id="UTI"),
            leito("u3", "U03", status="Ocupado", setor_id="UTI"),
            leito("u4", "U04", status="Reservado", setor_id="UTI", is_pcp=True),
            leito("e1", "101A"),
        ]
        ocupante = paciente("o", sexo="F", leito_id="u3", isolamentos=["KPC"])
        alvo = paciente("alvo", sexo="M", nascimento="invalida", isolamentos=["MRSA"], origem="CC - Recuperação")

        resultado = encontrar_leitos_compativeis(
            alvo, leitos, SETORES, [ocupante, alvo], ModoBuscaEnum.UTI, REFERENCIA
        )

        assert ids(resultado) == ["u1", "u2"]

    def test_modo_como_texto(self):
        leitos = [leito("u1", "U01", setor_id="UTI"), leito("e1", "101A")]
        assert ids(encontrar_leitos_compativeis(paciente("a"), leitos, SETORES, [], "UTI")) == ["u1"]
        assert ids(encontrar_leitos_compativeis(paciente("a"), leitos, SETORES, [], "enfermaria")) == ["e1"]


class TestRegraPCP:
    """Tests da regra de leito PCP."""

    @pytest.mark.parametrize("nascimento,elegivel", [
        ("11/05/2006", False),  # 17 anos
        ("10/05/2006", True),   # 18 anos
        ("10/05/1964", True),   # 60 anos
        ("10/05/1980 00:00:00", True),  # data com horário
        ("10/05/1963", False),  # 61 anos
        ("sem data", False),    # idade desconhecida (0)
    ])
    def test_limites_de_idade(self, nascimento, elegivel):
        leitos = [leito("pcp", "201A", is_pcp=True)]
        alvo = paciente("alvo", nascimento=nascimento)

        resultado = encontrar_leitos_compativeis(alvo, leitos, SETORES, [alvo], referencia=REFERENCIA)

        assert (ids(resultado) == ["pcp"]) is elegivel

    @pytest.mark.parametrize("origem", ["CC - RECUPERAÇÃO", "cc - recuperacao", " Cc - Recuperação "])
    def test_origem_centro_cirurgico(self, origem):
        alvo = paciente("alvo", origem=origem)

        motivos = motivos_inelegibilidade_pcp(alvo, REFERENCIA)

        assert any("Origem" in motivo for motivo in motivos)
        assert encontrar_leitos_compativeis(
            alvo, [leito("pcp", "201A", is_pcp=True)], SETORES, [], referencia=REFERENCIA
        ) == []

    def test_isolamento_ativo(self):
        alvo = paciente("alvo", isolamentos=["MRSA"])
        assert motivos_inelegibilidade_pcp(alvo, REFERENCIA) == ["Paciente com isolamento ativo"]

    def test_paciente_elegivel(self):
        alvo = paciente("alvo", origem="PS Decisão Clínica")
        assert motivos_inelegibilidade_pcp(alvo, REFERENCIA) == []

    def test_leito_comum_nao_aplica_regra(self):
        alvo = paciente("alvo", nascimento="01/01/2015")
        resultado = encontrar_leitos_compativeis(alvo, [leito("e1", "201A")], SETORES, [], referencia=REFERENCIA)
        assert ids(resultado) == ["e1"]


class TestRegraCoorte:
    """Tests da regra de coorte do quarto."""

    def cenario(self):
        leitos = [
            leito("l101", "101A", status="Ocupado"),
            leito("l102", "101B"),
            leito("l103", "101C", status="Higienização"),
        ]
        x = paciente("x", sexo="F", leito_id="l101", isolamentos=["MRSA"])
        return leitos, x

    def test_paciente_masculino_excluido(self):
        leitos, x = self.cenario()
        y = paciente("y", sexo="M")

        assert encontrar_leitos_compativeis(y, leitos, SETORES, [x, y], referencia=REFERENCIA) == []

    def test_paciente_feminino_com_mesmo_isolamento_incluido(self):
        leitos, x = self.cenario()
        z = paciente("z", sexo="F", isolamentos=["MRSA"])

        resultado = encontrar_leitos_compativeis(z, leitos, SETORES, [x, z], referencia=REFERENCIA)

        assert ids(resultado) == ["l102", "l103"]

    def test_paciente_sem_isolamento_em_quarto_isolado(self):
        leitos, x = self.cenario()
        alvo = paciente("alvo", sexo="F")
        assert encontrar_leitos_compativeis(alvo, leitos, SETORES, [x, alvo], referencia=REFERENCIA) == []

    def test_conjunto_de_isolamentos_deve_ser_igual(self):
        leitos, x = self.cenario()
        alvo = paciente("alvo", sexo="F", isolamentos=["MRSA", "VRE"])
        assert encontrar_leitos_compativeis(alvo, leitos, SETORES, [x, alvo], referencia=REFERENCIA) == []

    def test_isolado_nao_entra_em_quarto_limpo_ocupado(self):
        leitos = [leito("a", "301A", status="Ocupado"), leito("b", "301B")]
        ocupante = paciente("o", sexo="F", leito_id="a")
        alvo = paciente("alvo", sexo="F", isolamentos=["VRE"])

        assert encontrar_leitos_compativeis(alvo, leitos, SETORES, [ocupante, alvo], referencia=REFERENCIA) == []

    def test_isolado_em_quarto_vazio(self):
        leitos = [leito("a", "401A"), leito("b", "401B", status="Higienização")]
        alvo = paciente("alvo", sexo="M", isolamentos=["VRE"])

        resultado = encontrar_leitos_compativeis(alvo, leitos, SETORES, [alvo], referencia=REFERENCIA)

        assert ids(resultado) == ["a", "b"]

    def test_paciente_nao_conta_como_ocupante_do_proprio_quarto(self):
        leitos = [leito("a", "501A", status="Ocupado"), leito("b", "501B")]
        alvo = paciente("alvo", sexo="M", leito_id="a", isolamentos=["KPC"])

        resultado = encontrar_leitos_compativeis(alvo, leitos, SETORES, [alvo], referencia=REFERENCIA)

        assert ids(resultado) == ["b"]

    def test_sexos_mistos_nao_restringem_sexo(self):
        leitos = [leito("a", "601A", status="Ocupado"), leito("b", "601B", status="Ocupado"), leito("c", "601C")]
        ocupantes = [paciente("f", sexo="F", leito_id="a"), paciente("m", sexo="M", leito_id="b")]

        resultado = encontrar_leitos_compativeis(
            paciente("alvo", sexo="M"), leitos, SETORES, ocupantes, referencia=REFERENCIA
        )

        assert ids(resultado) == ["c"]

    def test_quartos_de_setores_diferentes(self):
        outra_enfermaria = SetorNormalizado(id="ENF2", nome_setor="Cirúrgica", tipo_setor="Enfermaria")
        leitos = [leito("a", "701A", status="Ocupado", setor_id="ENF2"), leito("b", "701B")]
        ocupante = paciente("o", sexo="F", leito_id="a")

        resultado = encontrar_leitos_compativeis(
            paciente("alvo", sexo="M"), leitos, SETORES + [outra_enfermaria], [ocupante], referencia=REFERENCIA
        )

        assert ids(resultado) == ["b"]

    def test_setor_de_outro_tipo_ignorado(self):
        leitos = [leito("ps1", "PS01", setor_id="PS"), leito("x", "X01", setor_id="INEXISTENTE")]
        assert encontrar_leitos_compativeis(paciente("a"), leitos, SETORES, []) == []


class TestRelatorio:
    """Tests do relatório de compatibilidade."""

    def test_agrupa_rejeicoes_por_regra(self):
        leitos = [
            leito("l101", "101A", status="Ocupado"),
            leito("l102", "101B"),
            leito("pcp", "201A", is_pcp=True),
            leito("livre", "301A"),
        ]
        x = paciente("x", sexo="F", leito_id="l101")
        alvo = paciente("alvo", sexo="M", nascimento="01/01/2010")

        relatorio = gerar_relatorio_compatibilidade(alvo, leitos, SETORES, [x, alvo], referencia=REFERENCIA)

        assert relatorio.idade == 14
        assert ids(relatorio.compativeis) == ["livre"]
        assert ids(relatorio.por_pcp.leitos) == ["pcp"]
        assert ids(relatorio.por_sexo.leitos) == ["l102"]
        assert relatorio.por_isolamento is None
        assert "abaixo de 18" in relatorio.por_pcp.mensagem
