from django.db import models

from futstore.core.entities import STATUS_CONFIRMADO, STATUS_CANCELADO


class Pedido(models.Model):
    """
    Pedido criado na conclusão do checkout. Os dados de entrega são uma cópia
    (snapshot) do endereço padrão do cliente naquele momento.
    """
    numero = models.CharField(max_length=32, unique=True, verbose_name="Número do Pedido")
    usuario = models.ForeignKey('infrastructure.Usuario', on_delete=models.PROTECT, related_name='pedidos')

    STATUS_CHOICES = [
        (STATUS_CONFIRMADO, 'Confirmado'),
        (STATUS_CANCELADO, 'Cancelado'),
    ]
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_CONFIRMADO)

    FORMA_PAGAMENTO_CHOICES = [
        ('card', 'Cartão de Crédito'),
        ('pix', 'PIX'),
    ]
    forma_pagamento = models.CharField(max_length=10, choices=FORMA_PAGAMENTO_CHOICES)

    # Subtotal + frete, já arredondado
    total = models.DecimalField(max_digits=10, decimal_places=2)

    endereco_entrega = models.JSONField(default=dict)

    data_criacao = models.DateTimeField(auto_now_add=True)
    data_modificacao = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Pedido'
        verbose_name_plural = 'Pedidos'
        db_table = 'vendas_pedido'
        ordering = ['-data_criacao']

    def __str__(self):
        return f"Pedido {self.numero} - {self.usuario.email}"


class ItemPedido(models.Model):
    """
    Item dentro de um pedido. Mantém um snapshot dos dados da camisa no
    momento da compra; a referência ao produto pode sumir sem afetar o pedido.
    """
    pedido = models.ForeignKey(Pedido, related_name='itens', on_delete=models.CASCADE)
    produto = models.ForeignKey(
        'catalog.Camisa', on_delete=models.SET_NULL, null=True, blank=True, related_name='itens_venda'
    )

    nome_produto = models.CharField(max_length=255)
    imagem_produto = models.CharField(max_length=500, blank=True)
    tamanho = models.CharField(max_length=4)
    quantidade = models.PositiveIntegerField()
    preco_unitario = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        verbose_name = 'Item do Pedido'
        verbose_name_plural = 'Itens do Pedido'
        db_table = 'vendas_item_pedido'

    def __str__(self):
        return f"{self.quantidade}x {self.nome_produto} ({self.tamanho}) em Pedido {self.pedido.numero}"

    @property
    def subtotal(self):
        return self.preco_unitario * self.quantidade
