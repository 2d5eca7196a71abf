from decimal import Decimal

from django.db import models
from django.utils.text import slugify

from futstore.core.entities import TAMANHOS
from futstore.core.precos import formatar_reais


def tamanhos_padrao():
    return list(TAMANHOS)


# ====================================================================
# Camisa (Produto)
# ====================================================================

class Camisa(models.Model):
    """Modelo para representar uma camisa de time no catálogo."""

    CATEGORIA_CHOICES = [
        ('brasileiro', 'Brasileiro'),
        ('europeu', 'Europeu'),
        ('selecoes', 'Seleções')
    ]

    nome = models.CharField(max_length=255, verbose_name="Nome da Camisa")
    slug = models.SlugField(max_length=255, unique=True, editable=False)
    time = models.CharField(max_length=100, verbose_name="Time")
    descricao = models.TextField(blank=True, verbose_name="Descrição Detalhada")

    preco = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Preço de Venda")
    preco_original = models.DecimalField(
        max_digits=10, decimal_places=2, blank=True, null=True,
        help_text='Preço "de" exibido riscado quando a camisa está em promoção',
    )
    estoque = models.PositiveIntegerField(default=0, verbose_name="Estoque Atual")

    # Listas de URLs e de tamanhos (P, M, G, GG)
    imagens = models.JSONField(default=list, blank=True)
    tamanhos = models.JSONField(default=tamanhos_padrao)

    categoria = models.CharField(max_length=20, choices=CATEGORIA_CHOICES, blank=True)
    em_promocao = models.BooleanField(default=False)
    em_destaque = models.BooleanField(default=False)

    # Exibidos no card da camisa; as avaliações em si ficam fora da loja
    avaliacao = models.DecimalField(max_digits=2, decimal_places=1, default=Decimal("4.5"))
    total_avaliacoes = models.PositiveIntegerField(default=0)
    visualizacoes = models.PositiveIntegerField(default=0)

    data_criacao = models.DateTimeField(auto_now_add=True)
    data_atualizacao = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        verbose_name = "Camisa"
        verbose_name_plural = "Camisas"
        ordering = ['nome']
        db_table = 'catalogo_camisa'

    def __str__(self):
        return self.nome

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(f"{self.time}-{self.nome}")
        super().save(*args, **kwargs)

    @property
    def preco_formatado(self):
        """Retorna o preço formatado em Real Brasileiro."""
        return formatar_reais(self.preco)
