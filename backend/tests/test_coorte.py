"""
Tests do cálculo de coorte dos quartos.
"""
from gestao_leitos.models.enums import SexoEnum
from gestao_leitos.schemas.normalizados import (
    LeitoNormalizado,
    PacienteNormalizado,
    QuartoNormalizado,
    SetorNormalizado,
)
from gestao_leitos.services.coorte_service import (
    RestricaoCoorte,
    agrupar_quartos,
    aplicar_restricoes_coorte,
    calcular_restricao_coorte,
    chaves_isolamento_ativo,
    descrever_restricao,
    mapear_ocupantes,
    montar_estrutura,
)


def setor(id="S1", tipo="Enfermaria", nome="Clínica Médica"):
    return SetorNormalizado(id=id, nome_setor=nome, tipo_setor=tipo)


def leito(id, codigo, status="Vago", setor_id="S1"):
    return LeitoNormalizado(id=id, codigo_leito=codigo, status=status, setor_id=setor_id)


def paciente(id, sexo="F", leito_id=None, isolamentos=()):
    return PacienteNormalizado.model_validate({
        "id": id,
        "nomePaciente": f"Paciente {id}",
        "sexo": sexo,
        "leitoId": leito_id,
        "isolamentos": [
            {"infeccaoId": sigla.lower(), "siglaInfeccao": sigla, "status": status}
            for sigla, status in isolamentos
        ],
    })


class TestChavesIsolamento:
    """Tests das chaves de isolamento ativo."""

    def test_somente_ativos_em_maiusculo(self):
        p = paciente("p1", isolamentos=[("mrsa", "Confirmado"), ("VRE", "Descartado"), ("kpc", "suspeito")])
        assert chaves_isolamento_ativo(p) == frozenset({"MRSA", "KPC"})

    def test_sem_paciente(self):
        assert chaves_isolamento_ativo(None) == frozenset()


class TestAgrupamento:
    """Tests do agrupamento de leitos em quartos."""

    def test_enfermaria_agrupa_por_prefixo(self):
        leitos = [leito("l3", "102A"), leito("l1", "101B"), leito("l2", "101A")]

        estrutura = agrupar_quartos(setor(), leitos, [])

        assert [q.nome_quarto for q in estrutura.quartos] == ["Quarto 101", "Quarto 102"]
        assert [l.codigo_leito for l in estrutura.quartos[0].leitos] == ["101A", "101B"]
        assert estrutura.quartos[0].id == "quarto-S1-101"
        assert estrutura.quartos[0].dinamico
        assert estrutura.leitos_sem_quarto == []

    def test_outros_setores_usam_lista_explicita(self):
        uti = setor(id="S2", tipo="UTI", nome="UTI Adulto")
        leitos = [leito("a", "B01", setor_id="S2"), leito("b", "B02", setor_id="S2"), leito("c", "B03", setor_id="S2")]
        quartos = [
            QuartoNormalizado(id="Q1", nome_quarto="Box 1", setor_id="S2", leitos_ids=["a", "b"]),
            QuartoNormalizado(id="Q9", nome_quarto="Outro setor", setor_id="S9", leitos_ids=["c"]),
        ]

        estrutura = agrupar_quartos(uti, leitos, quartos)

        assert len(estrutura.quartos) == 1
        assert [l.id for l in estrutura.quartos[0].leitos] == ["a", "b"]
        assert [l.id for l in estrutura.leitos_sem_quarto] == ["c"]

    def test_montar_estrutura_separa_setores(self):
        # Mesmo prefixo em setores diferentes não forma um quarto único
        leitos = [leito("l1", "101A", setor_id="S1"), leito("l2", "101B", setor_id="S3")]

        estruturas = montar_estrutura([setor("S1"), setor("S3")], leitos, [])

        assert [len(e.quartos) for e in estruturas] == [1, 1]
        assert estruturas[0].quartos[0].leitos[0].id == "l1"


class TestRestricaoCoorte:
    """Tests da restrição derivada dos ocupantes."""

    def test_cenario_mrsa_feminino(self):
        """Quarto com leitos 101, 102 e 103; 101 ocupado por paciente F com MRSA."""
        isolamento = setor(id="S5", tipo="Outros", nome="Isolamento")
        leitos = [
            leito("l101", "101", status="Ocupado", setor_id="S5"),
            leito("l102", "102", setor_id="S5"),
            leito("l103", "103", setor_id="S5"),
        ]
        quarto = QuartoNormalizado(id="Q1", nome_quarto="Quarto 1", setor_id="S5", leitos_ids=["l101", "l102", "l103"])
        x = paciente("x", sexo="F", leito_id="l101", isolamentos=[("MRSA", "Confirmado")])

        estrutura = agrupar_quartos(isolamento, leitos, [quarto])
        restricoes = aplicar_restricoes_coorte(estrutura.quartos, mapear_ocupantes([x]))

        esperado = RestricaoCoorte(sexo=SexoEnum.FEMININO, isolamentos=frozenset({"MRSA"}))
        assert restricoes == {"l102": esperado, "l103": esperado}

    def test_sexo_sem_isolamento(self):
        leitos = [leito("l1", "201A", status="Ocupado"), leito("l2", "201B", status="Higienização")]
        m = paciente("m", sexo="M", leito_id="l1")

        restricao = calcular_restricao_coorte(leitos, mapear_ocupantes([m]))

        assert restricao == RestricaoCoorte(sexo=SexoEnum.MASCULINO, isolamentos=frozenset())

    def test_uniao_dos_isolamentos(self):
        leitos = [leito("l1", "301A", status="Ocupado"), leito("l2", "301B", status="Regulado"), leito("l3", "301C")]
        a = paciente("a", leito_id="l1", isolamentos=[("MRSA", "Confirmado")])
        b = paciente("b", leito_id="l2", isolamentos=[("VRE", "Suspeito")])

        restricao = calcular_restricao_coorte(leitos, mapear_ocupantes([a, b]))

        assert restricao.isolamentos == frozenset({"MRSA", "VRE"})

    def test_sexos_divergentes_sem_restricao(self):
        leitos = [leito("l1", "401A", status="Ocupado"), leito("l2", "401B", status="Ocupado"), leito("l3", "401C")]
        ocupantes = mapear_ocupantes([
            paciente("f", sexo="F", leito_id="l1"),
            paciente("m", sexo="M", leito_id="l2"),
        ])

        assert calcular_restricao_coorte(leitos, ocupantes) is None
        quartos = agrupar_quartos(setor(), leitos, []).quartos
        assert aplicar_restricoes_coorte(quartos, ocupantes) == {}

    def test_quarto_vazio_sem_restricao(self):
        leitos = [leito("l1", "501A"), leito("l2", "501B")]
        assert calcular_restricao_coorte(leitos, {}) is None

    def test_leito_ocupado_sem_paciente_resolvido(self):
        leitos = [leito("l1", "601A", status="Ocupado"), leito("l2", "601B")]
        assert calcular_restricao_coorte(leitos, {}) is None

    def test_recalculo_idempotente(self):
        leitos = [leito("l1", "701A", status="Ocupado"), leito("l2", "701B")]
        ocupantes = mapear_ocupantes([paciente("p", sexo="M", leito_id="l1")])
        quartos = agrupar_quartos(setor(), leitos, []).quartos

        assert aplicar_restricoes_coorte(quartos, ocupantes) == aplicar_restricoes_coorte(quartos, ocupantes)


class TestDescricaoRestricao:
    """Tests do texto de compatibilidade."""

    def test_livre(self):
        assert descrever_restricao(None) == {"compatibilidade": "Livre", "badges": []}

    def test_com_isolamento(self):
        descricao = descrever_restricao(
            RestricaoCoorte(sexo=SexoEnum.FEMININO, isolamentos=frozenset({"VRE", "MRSA"}))
        )

        assert descricao["compatibilidade"] == (
            "Permitido apenas pacientes do sexo Feminino com isolamento de MRSA, VRE"
        )
        assert descricao["badges"] == ["Feminino", "MRSA", "VRE"]
