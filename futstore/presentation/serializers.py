from rest_framework import serializers

from futstore.catalog.models import Camisa as CamisaModel
from futstore.core.entities import FORMAS_PAGAMENTO


class CamisaSerializer(serializers.ModelSerializer):
    preco_formatado = serializers.CharField(read_only=True)

    class Meta:
        model = CamisaModel
        fields = [
            'id', 'nome', 'time', 'descricao', 'preco', 'preco_original', 'preco_formatado',
            'imagens', 'tamanhos', 'estoque', 'categoria', 'em_promocao', 'em_destaque',
            'avaliacao', 'total_avaliacoes', 'visualizacoes',
        ]


# ====================================================================
# SERIALIZERS PARA O CARRINHO
# ====================================================================

class ItemCarrinhoSerializer(serializers.Serializer):
    """Linha do carrinho (entidade ItemCarrinho) com o subtotal calculado."""
    produto_id = serializers.CharField()
    nome = serializers.CharField()
    imagem = serializers.CharField()
    tamanho = serializers.CharField()
    quantidade = serializers.IntegerField()
    preco_unitario = serializers.DecimalField(max_digits=10, decimal_places=2)
    subtotal = serializers.DecimalField(max_digits=10, decimal_places=2)


class ResumoPedidoSerializer(serializers.Serializer):
    subtotal = serializers.DecimalField(max_digits=10, decimal_places=2)
    frete = serializers.DecimalField(max_digits=10, decimal_places=2)
    total = serializers.DecimalField(max_digits=10, decimal_places=2)
    frete_gratis = serializers.BooleanField()


class CarrinhoSerializer(serializers.Serializer):
    """
    Serializer principal para o carrinho de compras.
    Espera no contexto o `resumo` (subtotal, frete, total) já calculado.
    """
    itens = ItemCarrinhoSerializer(many=True)
    total_itens = serializers.IntegerField()
    resumo = serializers.SerializerMethodField()

    def get_resumo(self, carrinho):
        return ResumoPedidoSerializer(self.context['resumo']).data


class AdicionarItemCarrinhoSerializer(serializers.Serializer):
    produto_id = serializers.CharField()
    # O tamanho é validado contra a lista da camisa no caso de uso
    tamanho = serializers.CharField(allow_blank=True)
    quantidade = serializers.IntegerField(min_value=1, default=1)


class AtualizarItemCarrinhoSerializer(serializers.Serializer):
    """Atualiza a quantidade e/ou troca o tamanho de uma linha existente."""
    produto_id = serializers.CharField()
    tamanho = serializers.CharField()
    quantidade = serializers.IntegerField(required=False)
    # Validado contra os tamanhos da camisa no caso de uso
    tamanho_novo = serializers.CharField(required=False)

    def validate(self, attrs):
        if 'quantidade' not in attrs and 'tamanho_novo' not in attrs:
            raise serializers.ValidationError("Informe a quantidade ou o novo tamanho.")
        return attrs


class RemoverItemCarrinhoSerializer(serializers.Serializer):
    produto_id = serializers.CharField()
    tamanho = serializers.CharField()


# ====================================================================
# SERIALIZERS PARA ENDEREÇO E CHECKOUT
# ====================================================================

class EnderecoSerializer(serializers.Serializer):
    """
    Campos do formulário de endereço. A obrigatoriedade é verificada no caso de
    uso, que também decide se um formulário vazio significa "usar o endereço salvo".
    """
    cep = serializers.CharField(max_length=9, required=False, allow_blank=True)
    rua = serializers.CharField(max_length=255, required=False, allow_blank=True)
    numero = serializers.CharField(max_length=10, required=False, allow_blank=True)
    complemento = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    bairro = serializers.CharField(max_length=100, required=False, allow_blank=True)
    cidade = serializers.CharField(max_length=100, required=False, allow_blank=True)
    estado = serializers.CharField(max_length=2, required=False, allow_blank=True)


class PerfilSerializer(serializers.Serializer):
    """Dados de perfil; o e-mail é o login e não é alterado por aqui."""
    email = serializers.EmailField(read_only=True)
    nome_completo = serializers.CharField(max_length=255, required=False, allow_blank=True)
    telefone = serializers.CharField(max_length=15, required=False, allow_blank=True, allow_null=True)
    cpf = serializers.CharField(max_length=14, required=False, allow_blank=True, allow_null=True)


class CheckoutSerializer(serializers.Serializer):
    """
    Serializer para a validação dos dados de checkout.
    """
    forma_pagamento = serializers.ChoiceField(choices=FORMAS_PAGAMENTO)
    endereco = EnderecoSerializer(required=False)
    numero_pedido_pendente = serializers.CharField(max_length=32, required=False, allow_blank=True)


# ====================================================================
# SERIALIZERS PARA PEDIDOS
# ====================================================================

class ItemPedidoSerializer(serializers.Serializer):
    produto_id = serializers.CharField(allow_null=True)
    nome_produto = serializers.CharField()
    imagem_produto = serializers.CharField()
    tamanho = serializers.CharField()
    quantidade = serializers.IntegerField()
    preco_unitario = serializers.DecimalField(max_digits=10, decimal_places=2)
    subtotal = serializers.DecimalField(max_digits=10, decimal_places=2)


class PedidoSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    numero = serializers.CharField()
    status = serializers.CharField()
    forma_pagamento = serializers.CharField()
    total = serializers.DecimalField(max_digits=10, decimal_places=2)
    endereco_entrega = serializers.DictField()
    data_criacao = serializers.DateTimeField()
    itens = ItemPedidoSerializer(many=True)
