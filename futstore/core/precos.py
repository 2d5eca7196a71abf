# futstore/core/precos.py
"""Cálculo de subtotal, frete e total do pedido em aritmética decimal exata."""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

FRETE_GRATIS_A_PARTIR = Decimal("300.00")
FRETE_FIXO = Decimal("29.90")

CENTAVOS = Decimal("0.01")


def quantizar_moeda(valor) -> Decimal:
    """Converte para Decimal com 2 casas. Floats passam por str para não herdar o erro binário."""
    if not isinstance(valor, Decimal):
        valor = Decimal(str(valor))
    return valor.quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def calcular_frete(subtotal, limite=FRETE_GRATIS_A_PARTIR, taxa=FRETE_FIXO) -> Decimal:
    """Frete grátis a partir do limite (inclusive); abaixo dele, taxa fixa."""
    if quantizar_moeda(subtotal) >= quantizar_moeda(limite):
        return Decimal("0.00")
    return quantizar_moeda(taxa)


def calcular_total_geral(subtotal, frete) -> Decimal:
    return quantizar_moeda(subtotal) + quantizar_moeda(frete)


@dataclass(frozen=True)
class ResumoPedido:
    subtotal: Decimal
    frete: Decimal
    total: Decimal

    @property
    def frete_gratis(self) -> bool:
        return self.frete == 0


def resumo_carrinho(carrinho, limite=FRETE_GRATIS_A_PARTIR, taxa=FRETE_FIXO) -> ResumoPedido:
    subtotal = quantizar_moeda(carrinho.total_preco)
    frete = calcular_frete(subtotal, limite, taxa)
    return ResumoPedido(subtotal=subtotal, frete=frete, total=calcular_total_geral(subtotal, frete))


def formatar_reais(valor) -> str:
    """Retorna o valor formatado em Real Brasileiro (R$ 1.234,56)."""
    return f"R$ {quantizar_moeda(valor):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
