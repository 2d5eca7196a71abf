from decimal import Decimal
from unittest.mock import patch

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from futstore.catalog.models import Camisa as CamisaModel
from futstore.core.entities import STATUS_CANCELADO
from futstore.core.exceptions import PersistenciaError
from futstore.infrastructure.models import Usuario
from futstore.infrastructure.repositories import PedidoRepositoryDjango
from futstore.vendas.models import Pedido as PedidoModel

ENDERECO = {
    "cep": "01310100",
    "rua": "Av. Paulista",
    "numero": "1000",
    "bairro": "Bela Vista",
    "cidade": "São Paulo",
    "estado": "SP",
}


class BaseAPITest(APITestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user(email="torcedor@example.com", password="senha-forte-123")
        self.flamengo = CamisaModel.objects.create(
            nome="Camisa Flamengo I 2024", time="Flamengo", preco=Decimal("199.90"),
            estoque=3, imagens=["https://img/flamengo.jpg"],
        )
        self.barcelona = CamisaModel.objects.create(
            nome="Camisa Barcelona I 2024", time="Barcelona", preco=Decimal("349.90"),
            estoque=8, tamanhos=["M", "G"],
        )
        self.url_carrinho = reverse('api_carrinho')
        self.url_checkout = reverse('api_checkout')

    def adicionar(self, camisa, tamanho="M", quantidade=1):
        return self.client.post(
            self.url_carrinho,
            {"produto_id": str(camisa.id), "tamanho": tamanho, "quantidade": quantidade},
            format="json",
        )


# ====================================================================
# CATÁLOGO
# ====================================================================

class CamisaAPITest(BaseAPITest):

    def test_listar_camisas_sem_login(self):
        response = self.client.get('/api/camisas/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

    def test_catalogo_e_somente_leitura(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.post('/api/camisas/', {"nome": "Nova"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)


# ====================================================================
# CARRINHO
# ====================================================================

class CarrinhoAPITest(BaseAPITest):

    def test_mesma_camisa_e_tamanho_mescla_na_mesma_linha(self):
        self.adicionar(self.flamengo)
        response = self.adicionar(self.flamengo)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data["itens"]), 1)
        self.assertEqual(response.data["itens"][0]["quantidade"], 2)
        self.assertEqual(response.data["total_itens"], 2)
        self.assertEqual(response.data["resumo"]["subtotal"], "399.80")
        self.assertEqual(response.data["resumo"]["frete"], "0.00")
        self.assertTrue(response.data["resumo"]["frete_gratis"])

    def test_carrinho_persiste_na_sessao(self):
        self.adicionar(self.flamengo, quantidade=1)
        response = self.client.get(self.url_carrinho)
        self.assertEqual(response.data["resumo"]["frete"], "29.90")
        self.assertEqual(response.data["resumo"]["total"], "229.80")

    def test_tamanho_sem_selecao_ou_indisponivel(self):
        self.assertEqual(self.adicionar(self.flamengo, tamanho="").status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.adicionar(self.barcelona, tamanho="P").status_code, status.HTTP_400_BAD_REQUEST)

    def test_produto_inexistente(self):
        response = self.client.post(
            self.url_carrinho, {"produto_id": "99999", "tamanho": "M"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_troca_de_tamanho_com_colisao(self):
        self.adicionar(self.flamengo, tamanho="M", quantidade=1)
        self.adicionar(self.flamengo, tamanho="G", quantidade=2)

        response = self.client.patch(
            self.url_carrinho,
            {"produto_id": str(self.flamengo.id), "tamanho": "M", "tamanho_novo": "G"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["itens"]), 1)
        self.assertEqual(response.data["itens"][0]["tamanho"], "G")
        self.assertEqual(response.data["itens"][0]["quantidade"], 3)

    def test_edicao_com_tamanho_em_minusculas(self):
        self.adicionar(self.flamengo, tamanho="M")
        response = self.client.patch(
            self.url_carrinho,
            {"produto_id": str(self.flamengo.id), "tamanho": "m", "quantidade": 3},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["itens"][0]["tamanho"], "M")
        self.assertEqual(response.data["itens"][0]["quantidade"], 3)

    def test_quantidade_zero_remove_linha(self):
        self.adicionar(self.flamengo)
        response = self.client.patch(
            self.url_carrinho,
            {"produto_id": str(self.flamengo.id), "tamanho": "M", "quantidade": 0},
            format="json",
        )
        self.assertEqual(response.data["itens"], [])

    def test_remover_linha(self):
        self.adicionar(self.flamengo)
        self.adicionar(self.barcelona, tamanho="G")
        response = self.client.delete(
            self.url_carrinho, {"produto_id": str(self.flamengo.id), "tamanho": "M"}, format="json"
        )
        self.assertEqual([i["produto_id"] for i in response.data["itens"]], [str(self.barcelona.id)])


# ====================================================================
# CHECKOUT
# ====================================================================

class CheckoutAPITest(BaseAPITest):

    def test_exige_login(self):
        self.adicionar(self.flamengo)
        response = self.client.post(self.url_checkout, {"forma_pagamento": "pix"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_carrinho_vazio(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.post(
            self.url_checkout, {"forma_pagamento": "pix", "endereco": ENDERECO}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(PedidoModel.objects.count(), 0)

    def test_sem_endereco(self):
        self.client.force_authenticate(self.usuario)
        self.adicionar(self.flamengo)
        response = self.client.post(self.url_checkout, {"forma_pagamento": "card"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Preencha o endereço de entrega!")

    def test_checkout_com_sucesso(self):
        self.client.force_authenticate(self.usuario)
        self.adicionar(self.flamengo, quantidade=2)

        response = self.client.post(
            self.url_checkout, {"forma_pagamento": "pix", "endereco": ENDERECO}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        numero = response.data["numero_pedido"]
        self.assertTrue(numero.startswith("FS-"))
        self.assertEqual(response.data["total"], "399.80")
        self.assertEqual(self.client.get(self.url_carrinho).data["itens"], [])

        confirmado = self.client.get(reverse('api_pedido_confirmado', args=[numero]))
        self.assertEqual(confirmado.status_code, status.HTTP_200_OK)
        self.assertEqual(confirmado.data["endereco_entrega"]["cep"], "01310-100")
        self.assertEqual(len(confirmado.data["itens"]), 1)

        historico = self.client.get(reverse('api_pedidos'))
        self.assertEqual([p["numero"] for p in historico.data], [numero])

    def test_falha_nos_itens_e_nova_tentativa_com_o_mesmo_numero(self):
        self.client.force_authenticate(self.usuario)
        self.adicionar(self.flamengo, quantidade=2)

        with patch.object(PedidoRepositoryDjango, 'criar_itens', side_effect=PersistenciaError()):
            falha = self.client.post(
                self.url_checkout, {"forma_pagamento": "pix", "endereco": ENDERECO}, format="json"
            )
        self.assertEqual(falha.status_code, status.HTTP_502_BAD_GATEWAY)
        numero = falha.data["numero_pedido"]
        self.assertEqual(len(self.client.get(self.url_carrinho).data["itens"]), 1)

        response = self.client.post(
            self.url_checkout,
            {"forma_pagamento": "pix", "numero_pedido_pendente": numero},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["numero_pedido"], numero)
        self.assertEqual(PedidoModel.objects.count(), 1)
        self.assertEqual(PedidoModel.objects.get().itens.count(), 1)

    def test_nova_tentativa_depois_do_cancelamento_do_pedido_orfao(self):
        self.client.force_authenticate(self.usuario)
        self.adicionar(self.flamengo, quantidade=2)

        with patch.object(PedidoRepositoryDjango, 'criar_itens', side_effect=PersistenciaError()):
            numero = self.client.post(
                self.url_checkout, {"forma_pagamento": "pix", "endereco": ENDERECO}, format="json"
            ).data["numero_pedido"]
        PedidoModel.objects.filter(numero=numero).update(status=STATUS_CANCELADO)

        response = self.client.post(
            self.url_checkout,
            {"forma_pagamento": "pix", "numero_pedido_pendente": numero},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(PedidoModel.objects.get().itens.count(), 0)
        self.assertEqual(len(self.client.get(self.url_carrinho).data["itens"]), 1)

    def test_pedido_de_outro_usuario(self):
        self.client.force_authenticate(self.usuario)
        self.adicionar(self.flamengo)
        numero = self.client.post(
            self.url_checkout, {"forma_pagamento": "pix", "endereco": ENDERECO}, format="json"
        ).data["numero_pedido"]

        outro = Usuario.objects.create_user(email="rival@example.com", password="senha-forte-456")
        self.client.force_authenticate(outro)
        response = self.client.get(reverse('api_pedido_confirmado', args=[numero]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


# ====================================================================
# ENDEREÇO PADRÃO
# ====================================================================

class EnderecoAPITest(BaseAPITest):

    def test_salvar_e_ler(self):
        self.client.force_authenticate(self.usuario)
        url = reverse('api_endereco')
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.put(url, ENDERECO, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(url).data["cep"], "01310-100")

    def test_formulario_incompleto(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.put(reverse('api_endereco'), dict(ENDERECO, cidade=""), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


# ====================================================================
# PERFIL
# ====================================================================

class PerfilAPITest(BaseAPITest):

    def test_exige_login(self):
        self.assertEqual(self.client.get(reverse('api_perfil')).status_code, status.HTTP_401_UNAUTHORIZED)

    def test_atualizar_e_ler(self):
        self.client.force_authenticate(self.usuario)
        url = reverse('api_perfil')

        response = self.client.put(
            url, {"nome_completo": "Arthur Antunes", "telefone": "21999990000", "cpf": "12345678901"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["cpf"], "123.456.789-01")

        perfil = self.client.get(url).data
        self.assertEqual(perfil["email"], "torcedor@example.com")
        self.assertEqual(perfil["nome_completo"], "Arthur Antunes")
        self.assertEqual(perfil["telefone"], "21999990000")

    def test_cpf_de_outra_conta(self):
        Usuario.objects.create_user(email="rival@example.com", password="senha-forte-456", cpf="123.456.789-01")
        self.client.force_authenticate(self.usuario)
        response = self.client.put(reverse('api_perfil'), {"cpf": "123.456.789-01"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Este CPF já está cadastrado em outra conta.")
