from datetime import timedelta
from decimal import Decimal

from django.db.utils import OperationalError
from django.test import TestCase
from django.utils import timezone
from psycopg2 import errors as pg_errors

from futstore.catalog.models import Camisa as CamisaModel
from futstore.core.entities import Carrinho, ItemCarrinho, ItemPedido, STATUS_CANCELADO
from futstore.core.exceptions import (
    CpfJaCadastradoError,
    NumeroPedidoDuplicadoError,
    PedidoNaoCriadoError,
    PedidoNaoEncontradoError,
    TempoEsgotadoError,
    UsuarioNaoEncontradoError,
)
from futstore.core.use_cases import FinalizarCheckoutUseCase
from futstore.infrastructure.models import Usuario, Endereco as EnderecoModel
from futstore.infrastructure.repositories import (
    CamisaRepositoryDjango,
    UsuarioRepositoryDjango,
    EnderecoRepositoryDjango,
    PedidoRepositoryDjango,
    traduzir_erros_banco,
)
from futstore.vendas.models import Pedido as PedidoModel, ItemPedido as ItemPedidoModel

ENDERECO = {
    "cep": "01310-100",
    "rua": "Av. Paulista",
    "numero": "1000",
    "complemento": None,
    "bairro": "Bela Vista",
    "cidade": "São Paulo",
    "estado": "SP",
}


class BaseRepositorioTest(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(email="torcedor@example.com", password="senha-forte-123")
        self.camisa = CamisaModel.objects.create(
            nome="Camisa Flamengo I 2024",
            time="Flamengo",
            preco=Decimal("199.90"),
            estoque=3,
            imagens=["https://img/flamengo.jpg"],
        )


# ====================================================================
# CATÁLOGO
# ====================================================================

class CamisaRepositoryTest(BaseRepositorioTest):

    def test_buscar_por_id(self):
        camisa = CamisaRepositoryDjango().buscar_por_id(str(self.camisa.id))
        self.assertEqual(camisa.nome, "Camisa Flamengo I 2024")
        self.assertEqual(camisa.tamanhos, ["P", "M", "G", "GG"])
        self.assertEqual(camisa.imagem_principal, "https://img/flamengo.jpg")

    def test_id_inexistente_ou_invalido(self):
        repo = CamisaRepositoryDjango()
        self.assertIsNone(repo.buscar_por_id("99999"))
        self.assertIsNone(repo.buscar_por_id("abc"))

    def test_avaliacoes_padrao(self):
        camisa = CamisaRepositoryDjango().buscar_por_id(str(self.camisa.id))
        self.assertEqual(camisa.avaliacao, Decimal("4.5"))
        self.assertEqual(camisa.total_avaliacoes, 0)
        self.assertEqual(camisa.visualizacoes, 0)


# ====================================================================
# PERFIL
# ====================================================================

class UsuarioRepositoryTest(BaseRepositorioTest):

    def test_atualizar_perfil(self):
        usuario = UsuarioRepositoryDjango().atualizar_perfil(
            self.usuario.id,
            {"nome_completo": "Arthur Antunes", "telefone": "21999990000", "cpf": "123.456.789-01"},
        )
        self.assertEqual(usuario.nome_completo, "Arthur Antunes")
        self.usuario.refresh_from_db()
        self.assertEqual(self.usuario.cpf, "123.456.789-01")

    def test_cpf_de_outra_conta(self):
        outro = Usuario.objects.create_user(email="rival@example.com", password="senha-forte-456")
        outro.cpf = "123.456.789-01"
        outro.save()

        with self.assertRaises(CpfJaCadastradoError):
            UsuarioRepositoryDjango().atualizar_perfil(
                self.usuario.id, {"nome_completo": "", "telefone": None, "cpf": "123.456.789-01"}
            )
        self.usuario.refresh_from_db()
        self.assertIsNone(self.usuario.cpf)

    def test_usuario_inexistente(self):
        repo = UsuarioRepositoryDjango()
        self.assertIsNone(repo.buscar_por_id(99999))
        with self.assertRaises(UsuarioNaoEncontradoError):
            repo.atualizar_perfil(99999, {"nome_completo": "", "telefone": None, "cpf": None})


# ====================================================================
# ENDEREÇO
# ====================================================================

class EnderecoRepositoryTest(BaseRepositorioTest):

    def test_primeiro_endereco_e_criado_como_padrao(self):
        endereco = EnderecoRepositoryDjango().salvar_padrao(self.usuario.id, ENDERECO)
        self.assertTrue(endereco.is_padrao)
        self.assertEqual(EnderecoModel.objects.filter(usuario=self.usuario).count(), 1)

    def test_segundo_salvamento_atualiza_no_lugar(self):
        repo = EnderecoRepositoryDjango()
        primeiro = repo.salvar_padrao(self.usuario.id, ENDERECO)
        segundo = repo.salvar_padrao(self.usuario.id, dict(ENDERECO, numero="2000"))

        self.assertEqual(primeiro.id, segundo.id)
        self.assertEqual(repo.buscar_padrao(self.usuario.id).numero, "2000")
        self.assertEqual(EnderecoModel.objects.filter(usuario=self.usuario, is_padrao=True).count(), 1)

    def test_sem_endereco(self):
        self.assertIsNone(EnderecoRepositoryDjango().buscar_padrao(self.usuario.id))


# ====================================================================
# PEDIDOS
# ====================================================================

class PedidoRepositoryTest(BaseRepositorioTest):

    def _criar_pedido(self, numero="FS-TESTE-0001"):
        return PedidoRepositoryDjango().criar_pedido(
            usuario_id=self.usuario.id,
            numero=numero,
            total=Decimal("399.80"),
            forma_pagamento="pix",
            endereco_entrega=ENDERECO,
            status="confirmed",
        )

    def _item(self, produto_id):
        return ItemPedido(
            produto_id=produto_id,
            nome_produto="Camisa Flamengo I 2024",
            imagem_produto="https://img/flamengo.jpg",
            tamanho="M",
            quantidade=2,
            preco_unitario=Decimal("199.90"),
        )

    def test_criar_pedido(self):
        pedido = self._criar_pedido()
        self.assertIsNotNone(pedido.id)
        self.assertEqual(pedido.endereco_entrega["cidade"], "São Paulo")
        self.assertEqual(pedido.itens, [])

    def test_numero_duplicado(self):
        self._criar_pedido()
        with self.assertRaises(NumeroPedidoDuplicadoError):
            self._criar_pedido()
        self.assertEqual(PedidoModel.objects.count(), 1)

    def test_criar_itens_guarda_snapshot(self):
        pedido = self._criar_pedido()
        itens = PedidoRepositoryDjango().criar_itens(pedido.id, [self._item(str(self.camisa.id))])

        self.assertEqual(len(itens), 1)
        self.assertIsNotNone(itens[0].id)
        self.assertEqual(itens[0].subtotal, Decimal("399.80"))
        self.assertEqual(ItemPedidoModel.objects.get().produto_id, self.camisa.id)

    def test_produto_fora_do_catalogo_nao_impede_os_itens(self):
        pedido = self._criar_pedido()
        PedidoRepositoryDjango().criar_itens(pedido.id, [self._item("99999")])
        item = ItemPedidoModel.objects.get()
        self.assertIsNone(item.produto_id)
        self.assertEqual(item.nome_produto, "Camisa Flamengo I 2024")

    def test_buscar_por_numero_traz_itens(self):
        pedido = self._criar_pedido()
        PedidoRepositoryDjango().criar_itens(pedido.id, [self._item(str(self.camisa.id))])
        encontrado = PedidoRepositoryDjango().buscar_por_numero("FS-TESTE-0001")
        self.assertEqual(len(encontrado.itens), 1)
        self.assertIsNone(PedidoRepositoryDjango().buscar_por_numero("FS-NAO-EXISTE"))

    def test_listar_sem_itens_e_cancelar(self):
        orfao = self._criar_pedido("FS-ORFAO-0001")
        completo = self._criar_pedido("FS-COMPLETO-0001")
        repo = PedidoRepositoryDjango()
        repo.criar_itens(completo.id, [self._item(str(self.camisa.id))])

        sem_itens = repo.listar_sem_itens(timezone.now() + timedelta(minutes=1))
        self.assertEqual([p.numero for p in sem_itens], ["FS-ORFAO-0001"])
        self.assertEqual(repo.listar_sem_itens(timezone.now() - timedelta(hours=1)), [])

        self.assertEqual(repo.atualizar_status(orfao.id, STATUS_CANCELADO).status, STATUS_CANCELADO)

    def test_atualizar_status_de_pedido_inexistente(self):
        with self.assertRaises(PedidoNaoEncontradoError):
            PedidoRepositoryDjango().atualizar_status(99999, STATUS_CANCELADO)


class TraducaoErrosBancoTest(TestCase):

    def test_erro_generico_vira_erro_da_etapa(self):
        with self.assertRaises(PedidoNaoCriadoError):
            with traduzir_erros_banco(PedidoNaoCriadoError, "teste"):
                raise OperationalError("conexão perdida")

    def test_statement_timeout_vira_tempo_esgotado(self):
        with self.assertRaises(TempoEsgotadoError):
            with traduzir_erros_banco(PedidoNaoCriadoError, "teste"):
                try:
                    raise pg_errors.QueryCanceled("canceling statement due to statement timeout")
                except pg_errors.QueryCanceled as e:
                    raise OperationalError(str(e)) from e


# ====================================================================
# CHECKOUT COMPLETO COM O BANCO
# ====================================================================

class CheckoutComBancoTest(BaseRepositorioTest):

    def test_checkout_grava_endereco_pedido_e_itens(self):
        use_case = FinalizarCheckoutUseCase(EnderecoRepositoryDjango(), PedidoRepositoryDjango())
        carrinho = Carrinho(itens=[ItemCarrinho(
            produto_id=str(self.camisa.id),
            nome=self.camisa.nome,
            imagem="https://img/flamengo.jpg",
            tamanho="M",
            quantidade=2,
            preco_unitario=Decimal("199.90"),
        )])

        resultado = use_case.executar(carrinho, self.usuario.id, "pix", dados_endereco=ENDERECO)

        pedido = PedidoModel.objects.get(numero=resultado.numero_pedido)
        self.assertEqual(pedido.total, Decimal("399.80"))
        self.assertEqual(pedido.status, "confirmed")
        self.assertEqual(pedido.endereco_entrega["rua"], "Av. Paulista")
        self.assertEqual(pedido.itens.count(), 1)
        self.assertTrue(EnderecoModel.objects.filter(usuario=self.usuario, is_padrao=True).exists())
        self.assertTrue(carrinho.esta_vazio())
