# futstore/core/testes.py

import random
import re
import unittest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import Mock

from futstore.core import carrinho as regras
from futstore.core.entities import (
    Camisa, Carrinho, Endereco, ItemCarrinho, ItemPedido, Pedido, Usuario, STATUS_CANCELADO,
)
from futstore.core.precos import (
    calcular_frete, calcular_total_geral, resumo_carrinho, quantizar_moeda, formatar_reais,
)
from futstore.core.use_cases import (
    FinalizarCheckoutUseCase,
    GerenciarCarrinhoUseCase,
    GerenciarEnderecoUseCase,
    GerenciarPerfilUseCase,
    DetalharPedidoUseCase,
    ListarPedidosOrfaosUseCase,
    gerar_numero_pedido,
    limpar_dados_endereco,
    limpar_dados_perfil,
)
from futstore.core.exceptions import (
    CarrinhoVazioError,
    DadosInvalidosError,
    EnderecoAusenteError,
    EnderecoNaoSalvoError,
    ItensPedidoNaoCriadosError,
    NumeroPedidoDuplicadoError,
    PedidoNaoCriadoError,
    PedidoNaoEncontradoError,
    PersistenciaError,
    ProdutoNaoEncontradoError,
    TamanhoInvalidoError,
    TempoEsgotadoError,
    UsuarioNaoEncontradoError,
)


def item(produto_id="1", tamanho="M", quantidade=1, preco="199.90", nome="Camisa Flamengo I 2024"):
    return ItemCarrinho(
        produto_id=produto_id,
        nome=nome,
        imagem="https://img/flamengo.jpg",
        tamanho=tamanho,
        quantidade=quantidade,
        preco_unitario=Decimal(preco),
    )


ENDERECO_FORM = {
    "cep": "01310-100",
    "rua": "Av. Paulista",
    "numero": "1000",
    "complemento": "",
    "bairro": "Bela Vista",
    "cidade": "São Paulo",
    "estado": "sp",
}


# ====================================================================
# REGRAS DE MESCLAGEM DO CARRINHO
# ====================================================================

class TestMesclagemCarrinho(unittest.TestCase):

    def test_mesma_chave_soma_quantidade_sem_nova_linha(self):
        itens = regras.adicionar_item([item(quantidade=1)], item(quantidade=2))
        self.assertEqual(len(itens), 1)
        self.assertEqual(itens[0].quantidade, 3)

    def test_mesclagem_mantem_snapshot_da_linha_existente(self):
        itens = regras.adicionar_item([item(preco="199.90")], item(preco="149.90", nome="Outro nome"))
        self.assertEqual(itens[0].preco_unitario, Decimal("199.90"))
        self.assertEqual(itens[0].nome, "Camisa Flamengo I 2024")

    def test_tamanho_diferente_vira_nova_linha_no_fim(self):
        itens = regras.adicionar_item([item(tamanho="M")], item(tamanho="G"))
        self.assertEqual([i.tamanho for i in itens], ["M", "G"])

    def test_adicionar_nao_altera_a_lista_original(self):
        originais = [item(quantidade=1)]
        regras.adicionar_item(originais, item(quantidade=5))
        self.assertEqual(originais[0].quantidade, 1)

    def test_remover_chave_ausente_nao_e_erro(self):
        itens = [item()]
        self.assertEqual(regras.remover_item(itens, "99", "M"), itens)

    def test_quantidade_zero_ou_negativa_equivale_a_remover(self):
        itens = [item(tamanho="M"), item(tamanho="G")]
        for quantidade in (0, -3):
            self.assertEqual(
                regras.atualizar_quantidade(itens, "1", "M", quantidade),
                regras.remover_item(itens, "1", "M"),
            )

    def test_atualizar_quantidade_substitui_valor(self):
        itens = regras.atualizar_quantidade([item(quantidade=1)], "1", "M", 4)
        self.assertEqual(itens[0].quantidade, 4)

    def test_troca_de_tamanho_com_colisao_soma_e_remove_linha_antiga(self):
        itens = [item(tamanho="M", quantidade=1), item(tamanho="G", quantidade=2)]
        resultado = regras.atualizar_tamanho(itens, "1", "M", "G")
        self.assertEqual(len(resultado), 1)
        self.assertEqual(resultado[0].tamanho, "G")
        self.assertEqual(resultado[0].quantidade, 3)

    def test_troca_de_tamanho_sem_colisao_renomeia_no_lugar(self):
        itens = [item(produto_id="1", tamanho="M"), item(produto_id="2", tamanho="P")]
        resultado = regras.atualizar_tamanho(itens, "1", "M", "GG")
        self.assertEqual([(i.produto_id, i.tamanho) for i in resultado], [("1", "GG"), ("2", "P")])

    def test_troca_de_tamanho_sem_linha_antiga_nao_faz_nada(self):
        itens = [item(tamanho="G")]
        self.assertEqual(regras.atualizar_tamanho(itens, "1", "P", "G"), itens)

    def test_totais(self):
        itens = [item(quantidade=2, preco="199.90"), item(produto_id="3", quantidade=1, preco="349.90")]
        self.assertEqual(regras.total_itens(itens), 3)
        self.assertEqual(regras.total_preco(itens), Decimal("749.70"))
        self.assertEqual(regras.total_preco([]), Decimal("0.00"))

    def test_total_independe_da_ordem_das_linhas(self):
        precos = ["0.10", "0.20", "199.90", "249.90", "0.01", "349.90", "19.99", "0.05"]
        itens = [
            item(produto_id=str(i), preco=preco, quantidade=(i % 4) + 1)
            for i, preco in enumerate(precos * 5)
        ]
        esperado = regras.total_preco(itens)
        embaralhador = random.Random(2024)
        for _ in range(20):
            embaralhados = list(itens)
            embaralhador.shuffle(embaralhados)
            total = regras.total_preco(embaralhados)
            self.assertEqual(total, esperado)
            self.assertEqual(total.as_tuple().exponent, -2)

    def test_validar_tamanho(self):
        self.assertEqual(regras.validar_tamanho(" gg ", ["P", "M", "G", "GG"]), "GG")
        with self.assertRaises(TamanhoInvalidoError):
            regras.validar_tamanho("", ["P", "M"])
        with self.assertRaises(TamanhoInvalidoError):
            regras.validar_tamanho("XG", ["P", "M", "G", "GG"])


class TestEntidadeCarrinho(unittest.TestCase):

    def test_no_maximo_uma_linha_por_chave(self):
        carrinho = Carrinho()
        for tamanho in ("M", "G", "M", "G", "M"):
            carrinho.adicionar_item(item(tamanho=tamanho))
        chaves = [i.chave for i in carrinho.itens]
        self.assertEqual(len(chaves), len(set(chaves)))
        self.assertEqual(carrinho.total_itens, 5)

    def test_item_ida_e_volta_pela_sessao(self):
        original = item(quantidade=2)
        self.assertEqual(ItemCarrinho.from_dict(original.to_dict()), original)

    def test_limpar(self):
        carrinho = Carrinho(itens=[item()])
        self.assertTrue(carrinho.limpar().esta_vazio())


# ====================================================================
# PREÇOS E FRETE
# ====================================================================

class TestPrecos(unittest.TestCase):

    def test_frete_abaixo_do_limite(self):
        self.assertEqual(calcular_frete(Decimal("299.99")), Decimal("29.90"))

    def test_frete_gratis_no_limite_exato(self):
        self.assertEqual(calcular_frete(Decimal("300.00")), Decimal("0.00"))

    def test_frete_do_carrinho_vazio_e_a_taxa(self):
        self.assertEqual(calcular_frete(Decimal("0")), Decimal("29.90"))

    def test_limite_e_taxa_configuraveis(self):
        self.assertEqual(calcular_frete(Decimal("150.00"), limite=Decimal("150.00")), Decimal("0.00"))
        self.assertEqual(calcular_frete(Decimal("10.00"), taxa=Decimal("15.00")), Decimal("15.00"))

    def test_total_geral(self):
        self.assertEqual(calcular_total_geral(Decimal("199.90"), Decimal("29.90")), Decimal("229.80"))

    def test_float_nao_herda_erro_binario(self):
        self.assertEqual(quantizar_moeda(0.1 + 0.2), Decimal("0.30"))

    def test_resumo_do_carrinho(self):
        carrinho = Carrinho(itens=[item(quantidade=2)])
        resumo = resumo_carrinho(carrinho)
        self.assertEqual(resumo.subtotal, Decimal("399.80"))
        self.assertEqual(resumo.frete, Decimal("0.00"))
        self.assertEqual(resumo.total, Decimal("399.80"))
        self.assertTrue(resumo.frete_gratis)

    def test_formatar_reais(self):
        self.assertEqual(formatar_reais(Decimal("1234.5")), "R$ 1.234,50")


# ====================================================================
# CARRINHO (CASO DE USO)
# ====================================================================

class TestGerenciarCarrinho(unittest.TestCase):

    def setUp(self):
        self.camisa_repo_mock = Mock()
        self.use_case = GerenciarCarrinhoUseCase(self.camisa_repo_mock)
        self.camisa = Camisa(
            id=1,
            nome="Camisa Flamengo I 2024",
            preco=Decimal("199.90"),
            imagens=["https://img/1.jpg", "https://img/2.jpg"],
            tamanhos=["P", "M", "G"],
        )
        self.camisa_repo_mock.buscar_por_id.return_value = self.camisa

    def test_adicionar_tira_snapshot_da_camisa(self):
        carrinho = self.use_case.adicionar_item(Carrinho(), "1", "m", 2)
        linha = carrinho.itens[0]
        self.assertEqual(linha.chave, ("1", "M"))
        self.assertEqual(linha.imagem, "https://img/1.jpg")
        self.assertEqual(linha.preco_unitario, Decimal("199.90"))
        self.assertEqual(linha.quantidade, 2)

    def test_tamanho_fora_da_lista_da_camisa(self):
        with self.assertRaises(TamanhoInvalidoError):
            self.use_case.adicionar_item(Carrinho(), "1", "GG")

    def test_produto_inexistente(self):
        self.camisa_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.adicionar_item(Carrinho(), "999", "M")

    def test_quantidade_nao_positiva(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.adicionar_item(Carrinho(), "1", "M", 0)
        self.camisa_repo_mock.buscar_por_id.assert_not_called()

    def test_trocar_para_tamanho_inexistente(self):
        carrinho = Carrinho(itens=[item(tamanho="M")])
        with self.assertRaises(TamanhoInvalidoError):
            self.use_case.atualizar_tamanho(carrinho, "1", "M", "GG")
        self.assertEqual(carrinho.itens[0].tamanho, "M")

    def test_tamanho_em_minusculas_na_edicao_da_linha(self):
        carrinho = Carrinho(itens=[item(tamanho="M", quantidade=1)])

        self.use_case.atualizar_quantidade(carrinho, "1", " m ", 3)
        self.assertEqual(carrinho.itens[0].quantidade, 3)

        self.use_case.atualizar_tamanho(carrinho, "1", "m", "g")
        self.assertEqual(carrinho.itens[0].chave, ("1", "G"))

        self.use_case.remover_item(carrinho, "1", "g")
        self.assertTrue(carrinho.esta_vazio())


# ====================================================================
# ENDEREÇO
# ====================================================================

class TestEndereco(unittest.TestCase):

    def test_formulario_vazio_significa_sem_formulario(self):
        self.assertIsNone(limpar_dados_endereco(None))
        self.assertIsNone(limpar_dados_endereco({"rua": "  ", "cep": ""}))

    def test_formulario_incompleto(self):
        dados = dict(ENDERECO_FORM, bairro="")
        with self.assertRaises(DadosInvalidosError):
            limpar_dados_endereco(dados)

    def test_normalizacao(self):
        limpos = limpar_dados_endereco(dict(ENDERECO_FORM, cep="01310100"))
        self.assertEqual(limpos["cep"], "01310-100")
        self.assertEqual(limpos["estado"], "SP")
        self.assertIsNone(limpos["complemento"])

    def test_salvar_padrao_sem_dados(self):
        repo = Mock()
        with self.assertRaises(EnderecoAusenteError):
            GerenciarEnderecoUseCase(repo).salvar_padrao(1, {})
        repo.salvar_padrao.assert_not_called()


# ====================================================================
# PERFIL
# ====================================================================

class TestPerfil(unittest.TestCase):

    def setUp(self):
        self.usuario_repo_mock = Mock()
        self.use_case = GerenciarPerfilUseCase(self.usuario_repo_mock)

    def test_normalizacao(self):
        limpos = limpar_dados_perfil({"nome_completo": " Zico ", "telefone": " ", "cpf": "12345678901"})
        self.assertEqual(limpos, {"nome_completo": "Zico", "telefone": None, "cpf": "123.456.789-01"})

    def test_cpf_em_branco_vira_none(self):
        self.assertIsNone(limpar_dados_perfil({"nome_completo": "Zico"})["cpf"])

    def test_cpf_com_digitos_faltando(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.atualizar(1, {"cpf": "123.456.789"})
        self.usuario_repo_mock.atualizar_perfil.assert_not_called()

    def test_atualizar_grava_dados_limpos(self):
        self.usuario_repo_mock.atualizar_perfil.return_value = Usuario(id=1, nome_completo="Zico")
        usuario = self.use_case.atualizar(1, {"nome_completo": "Zico", "telefone": "(21) 99999-0000"})

        self.assertEqual(usuario.nome_completo, "Zico")
        self.usuario_repo_mock.atualizar_perfil.assert_called_once_with(
            1, {"nome_completo": "Zico", "telefone": "(21) 99999-0000", "cpf": None}
        )

    def test_usuario_inexistente(self):
        self.usuario_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(UsuarioNaoEncontradoError):
            self.use_case.obter(99)


# ====================================================================
# CHECKOUT
# ====================================================================

class TestFinalizarCheckout(unittest.TestCase):

    def setUp(self):
        self.endereco_repo_mock = Mock()
        self.pedido_repo_mock = Mock()
        self.numeros = iter(["FS-AAA-0001", "FS-AAA-0002", "FS-AAA-0003", "FS-AAA-0004"])

        self.use_case = FinalizarCheckoutUseCase(
            endereco_repo=self.endereco_repo_mock,
            pedido_repo=self.pedido_repo_mock,
            gerar_numero=lambda: next(self.numeros),
        )

        self.endereco_salvo = Endereco(usuario_id=7, id=3, **dict(ENDERECO_FORM, estado="SP", complemento=None))
        self.endereco_repo_mock.buscar_padrao.return_value = self.endereco_salvo
        self.endereco_repo_mock.salvar_padrao.return_value = self.endereco_salvo

        def criar_pedido(**kwargs):
            return Pedido(id=42, itens=[], **kwargs)

        self.pedido_repo_mock.criar_pedido.side_effect = criar_pedido
        self.pedido_repo_mock.criar_itens.side_effect = lambda pedido_id, itens: itens

        self.carrinho = Carrinho(itens=[item(quantidade=2)])

    def test_checkout_com_sucesso(self):
        """Camisa de R$ 199,90 x2, pix, endereço salvo: total 399,80 com frete grátis."""
        resultado = self.use_case.executar(self.carrinho, usuario_id=7, forma_pagamento="pix")

        self.assertEqual(resultado.numero_pedido, "FS-AAA-0001")
        self.assertEqual(resultado.resumo.frete, Decimal("0.00"))
        kwargs = self.pedido_repo_mock.criar_pedido.call_args.kwargs
        self.assertEqual(kwargs["total"], Decimal("399.80"))
        self.assertEqual(kwargs["status"], "confirmed")
        self.assertEqual(kwargs["forma_pagamento"], "pix")
        self.assertNotIn("id", kwargs["endereco_entrega"])
        self.assertNotIn("usuario_id", kwargs["endereco_entrega"])

        pedido_id, itens = self.pedido_repo_mock.criar_itens.call_args.args
        self.assertEqual(pedido_id, 42)
        self.assertEqual(len(itens), 1)
        self.assertEqual(itens[0].quantidade, 2)
        self.assertEqual(itens[0].preco_unitario, Decimal("199.90"))

        self.assertTrue(self.carrinho.esta_vazio())
        self.endereco_repo_mock.salvar_padrao.assert_not_called()

    def test_total_com_frete(self):
        carrinho = Carrinho(itens=[item(quantidade=1)])
        resultado = self.use_case.executar(carrinho, usuario_id=7, forma_pagamento="card")
        self.assertEqual(resultado.pedido.total, Decimal("229.80"))

    def test_formulario_de_endereco_e_gravado_antes_do_pedido(self):
        ordem = []
        self.endereco_repo_mock.salvar_padrao.side_effect = lambda *a: ordem.append("endereco") or self.endereco_salvo
        criar_pedido = self.pedido_repo_mock.criar_pedido.side_effect
        self.pedido_repo_mock.criar_pedido.side_effect = lambda **kw: ordem.append("pedido") or criar_pedido(**kw)

        self.use_case.executar(self.carrinho, 7, "pix", dados_endereco=ENDERECO_FORM)

        self.assertEqual(ordem, ["endereco", "pedido"])
        usuario_id, dados = self.endereco_repo_mock.salvar_padrao.call_args.args
        self.assertEqual(usuario_id, 7)
        self.assertEqual(dados["estado"], "SP")
        self.endereco_repo_mock.buscar_padrao.assert_not_called()

    def test_carrinho_vazio_nao_toca_no_banco(self):
        with self.assertRaises(CarrinhoVazioError):
            self.use_case.executar(Carrinho(), 7, "pix")
        self.assertEqual(self.endereco_repo_mock.method_calls, [])
        self.assertEqual(self.pedido_repo_mock.method_calls, [])

    def test_forma_de_pagamento_invalida(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(self.carrinho, 7, "boleto")
        self.pedido_repo_mock.criar_pedido.assert_not_called()

    def test_sem_endereco(self):
        self.endereco_repo_mock.buscar_padrao.return_value = None
        with self.assertRaises(EnderecoAusenteError):
            self.use_case.executar(self.carrinho, 7, "pix")
        self.pedido_repo_mock.criar_pedido.assert_not_called()
        self.assertFalse(self.carrinho.esta_vazio())

    def test_falha_ao_salvar_endereco_interrompe(self):
        self.endereco_repo_mock.salvar_padrao.side_effect = EnderecoNaoSalvoError()
        with self.assertRaises(EnderecoNaoSalvoError):
            self.use_case.executar(self.carrinho, 7, "pix", dados_endereco=ENDERECO_FORM)
        self.pedido_repo_mock.criar_pedido.assert_not_called()
        self.assertFalse(self.carrinho.esta_vazio())

    def test_falha_ao_criar_pedido_preserva_carrinho(self):
        self.pedido_repo_mock.criar_pedido.side_effect = TempoEsgotadoError()
        with self.assertRaises(PersistenciaError):
            self.use_case.executar(self.carrinho, 7, "pix")
        self.pedido_repo_mock.criar_itens.assert_not_called()
        self.assertEqual(len(self.carrinho.itens), 1)

    def test_numero_repetido_gera_outro(self):
        criar_pedido = self.pedido_repo_mock.criar_pedido.side_effect
        self.pedido_repo_mock.criar_pedido.side_effect = [
            NumeroPedidoDuplicadoError("FS-AAA-0001"),
            criar_pedido(usuario_id=7, numero="FS-AAA-0002", total=Decimal("399.80"),
                         forma_pagamento="pix", endereco_entrega={}, status="confirmed"),
        ]
        resultado = self.use_case.executar(self.carrinho, 7, "pix")
        self.assertEqual(resultado.numero_pedido, "FS-AAA-0002")
        self.assertEqual(self.pedido_repo_mock.criar_pedido.call_count, 2)

    def test_numero_repetido_esgota_tentativas(self):
        self.pedido_repo_mock.criar_pedido.side_effect = NumeroPedidoDuplicadoError("x")
        with self.assertRaises(PedidoNaoCriadoError):
            self.use_case.executar(self.carrinho, 7, "pix")
        self.assertEqual(
            self.pedido_repo_mock.criar_pedido.call_count, FinalizarCheckoutUseCase.TENTATIVAS_NUMERO_PEDIDO
        )

    def test_falha_nos_itens_informa_numero_e_preserva_carrinho(self):
        self.pedido_repo_mock.criar_itens.side_effect = PersistenciaError()
        with self.assertRaises(ItensPedidoNaoCriadosError) as ctx:
            self.use_case.executar(self.carrinho, 7, "pix")
        self.assertEqual(ctx.exception.numero_pedido, "FS-AAA-0001")
        self.assertEqual(ctx.exception.pedido_id, 42)
        self.assertEqual(len(self.carrinho.itens), 1)

    def test_nova_tentativa_reaproveita_pedido_sem_itens(self):
        self.pedido_repo_mock.buscar_por_numero.return_value = Pedido(
            id=42, numero="FS-AAA-0001", usuario_id=7, total=Decimal("399.80"),
            forma_pagamento="pix", endereco_entrega={}, itens=[],
        )
        resultado = self.use_case.executar(self.carrinho, 7, "pix", numero_pedido_pendente="FS-AAA-0001")

        self.assertEqual(resultado.numero_pedido, "FS-AAA-0001")
        self.pedido_repo_mock.criar_pedido.assert_not_called()
        self.pedido_repo_mock.criar_itens.assert_called_once()
        self.assertTrue(self.carrinho.esta_vazio())

    def test_nova_tentativa_com_pedido_ja_concluido(self):
        self.pedido_repo_mock.buscar_por_numero.return_value = Pedido(
            id=42, numero="FS-AAA-0001", usuario_id=7, total=Decimal("399.80"),
            forma_pagamento="pix", endereco_entrega={},
            itens=[ItemPedido.de_item_carrinho(item(quantidade=2), 42)],
        )
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(self.carrinho, 7, "pix", numero_pedido_pendente="FS-AAA-0001")
        self.pedido_repo_mock.criar_itens.assert_not_called()

    def test_nova_tentativa_com_pedido_de_outro_usuario(self):
        self.pedido_repo_mock.buscar_por_numero.return_value = Pedido(
            id=42, numero="FS-AAA-0001", usuario_id=99, total=Decimal("399.80"),
            forma_pagamento="pix", endereco_entrega={},
        )
        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.executar(self.carrinho, 7, "pix", numero_pedido_pendente="FS-AAA-0001")

    def _pedido_pendente(self, **kwargs):
        dados = dict(
            id=42, numero="FS-AAA-0001", usuario_id=7, total=Decimal("399.80"),
            forma_pagamento="pix", endereco_entrega={}, itens=[],
        )
        dados.update(kwargs)
        self.pedido_repo_mock.buscar_por_numero.return_value = Pedido(**dados)

    def test_nova_tentativa_com_pedido_cancelado(self):
        self._pedido_pendente(status=STATUS_CANCELADO)
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(self.carrinho, 7, "pix", numero_pedido_pendente="FS-AAA-0001")
        self.pedido_repo_mock.criar_itens.assert_not_called()
        self.assertEqual(len(self.carrinho.itens), 1)

    def test_nova_tentativa_com_outra_forma_de_pagamento(self):
        self._pedido_pendente(forma_pagamento="pix")
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(self.carrinho, 7, "card", numero_pedido_pendente="FS-AAA-0001")
        self.pedido_repo_mock.criar_itens.assert_not_called()
        self.assertEqual(len(self.carrinho.itens), 1)

    def test_nova_tentativa_com_carrinho_alterado(self):
        # Pedido pendente de 399,80; o carrinho agora tem uma camisa só (199,90 + 29,90 de frete)
        self._pedido_pendente()
        carrinho = Carrinho(itens=[item(quantidade=1)])
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(carrinho, 7, "pix", numero_pedido_pendente="FS-AAA-0001")
        self.pedido_repo_mock.criar_pedido.assert_not_called()
        self.pedido_repo_mock.criar_itens.assert_not_called()
        self.assertEqual(len(carrinho.itens), 1)


class TestNumeroPedido(unittest.TestCase):

    def test_formato(self):
        numero = gerar_numero_pedido(agora_ms=1700000000000)
        self.assertRegex(numero, r"^FS-[0-9A-Z]+-[0-9A-Z]{4}$")
        # 1700000000000 em base 36
        self.assertTrue(numero.startswith("FS-LOYW3V28-"))

    def test_maiusculas(self):
        numero = gerar_numero_pedido()
        self.assertEqual(numero, numero.upper())
        self.assertIsNotNone(re.match(r"^FS-", numero))


# ====================================================================
# CONSULTA E RECONCILIAÇÃO DE PEDIDOS
# ====================================================================

class TestConsultaPedidos(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.pedido = Pedido(
            id=5, numero="FS-X-0001", usuario_id=7, total=Decimal("10.00"),
            forma_pagamento="pix", endereco_entrega={},
        )

    def test_pedido_de_outro_usuario_nao_e_encontrado(self):
        self.pedido_repo_mock.buscar_por_id.return_value = self.pedido
        with self.assertRaises(PedidoNaoEncontradoError):
            DetalharPedidoUseCase(self.pedido_repo_mock).executar(usuario_id=8, pedido_id=5)

    def test_por_numero(self):
        self.pedido_repo_mock.buscar_por_numero.return_value = self.pedido
        pedido = DetalharPedidoUseCase(self.pedido_repo_mock).por_numero(7, "FS-X-0001")
        self.assertIs(pedido, self.pedido)

    def test_orfaos_respeitam_idade_minima_e_cancelam(self):
        agora = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        self.pedido_repo_mock.listar_sem_itens.return_value = [self.pedido]
        self.pedido_repo_mock.atualizar_status.return_value = self.pedido

        use_case = ListarPedidosOrfaosUseCase(self.pedido_repo_mock)
        orfaos = use_case.executar(idade_minima=timedelta(minutes=30), agora=agora)

        self.pedido_repo_mock.listar_sem_itens.assert_called_once_with(agora - timedelta(minutes=30))
        use_case.cancelar(orfaos)
        self.pedido_repo_mock.atualizar_status.assert_called_once_with(5, STATUS_CANCELADO)


if __name__ == '__main__':
    unittest.main()
