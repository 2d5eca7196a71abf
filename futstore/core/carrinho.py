# futstore/core/carrinho.py
"""
Regras de mesclagem das linhas do carrinho.

Funções puras: recebem a lista atual de ItemCarrinho e devolvem uma NOVA lista,
mantendo a invariante de no máximo uma linha por par (produto_id, tamanho).
A entidade Carrinho delega a estas funções.
"""
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, List, Sequence

from futstore.core.exceptions import TamanhoInvalidoError


def _mesma_chave(item, produto_id, tamanho) -> bool:
    return item.produto_id == str(produto_id) and item.tamanho == tamanho


def adicionar_item(itens: Sequence, novo) -> List:
    """
    Adiciona uma linha. Se já existir a mesma (produto, tamanho), apenas soma a
    quantidade; nome, imagem e preço da linha existente são mantidos.
    """
    if any(_mesma_chave(i, novo.produto_id, novo.tamanho) for i in itens):
        return [
            replace(i, quantidade=i.quantidade + novo.quantidade)
            if _mesma_chave(i, novo.produto_id, novo.tamanho) else i
            for i in itens
        ]
    return list(itens) + [novo]


def remover_item(itens: Sequence, produto_id, tamanho: str) -> List:
    """Remove a linha da chave informada. Chave ausente não é erro."""
    return [i for i in itens if not _mesma_chave(i, produto_id, tamanho)]


def atualizar_quantidade(itens: Sequence, produto_id, tamanho: str, quantidade: int) -> List:
    if quantidade <= 0:
        return remover_item(itens, produto_id, tamanho)
    return [
        replace(i, quantidade=quantidade) if _mesma_chave(i, produto_id, tamanho) else i
        for i in itens
    ]


def atualizar_tamanho(itens: Sequence, produto_id, tamanho_antigo: str, tamanho_novo: str) -> List:
    """
    Troca o tamanho de uma linha. Se já houver linha no tamanho novo, as
    quantidades são somadas nela e a linha antiga some (colisão); caso
    contrário a linha é renomeada no lugar.
    """
    antigo = next((i for i in itens if _mesma_chave(i, produto_id, tamanho_antigo)), None)
    if antigo is None or tamanho_antigo == tamanho_novo:
        return list(itens)

    if any(_mesma_chave(i, produto_id, tamanho_novo) for i in itens):
        return [
            replace(i, quantidade=i.quantidade + antigo.quantidade)
            if _mesma_chave(i, produto_id, tamanho_novo) else i
            for i in itens
            if not _mesma_chave(i, produto_id, tamanho_antigo)
        ]

    return [
        replace(i, tamanho=tamanho_novo) if _mesma_chave(i, produto_id, tamanho_antigo) else i
        for i in itens
    ]


def total_itens(itens: Iterable) -> int:
    return sum(i.quantidade for i in itens)


def total_preco(itens: Iterable) -> Decimal:
    # Decimal('0.00') como valor inicial mantém o resultado em Decimal mesmo com o carrinho vazio
    return sum((i.preco_unitario * i.quantidade for i in itens), Decimal("0.00"))


def validar_tamanho(tamanho: str, permitidos: Sequence[str]) -> str:
    """Garante que um tamanho foi escolhido e que ele existe para o produto."""
    tamanho = (tamanho or "").strip().upper()
    if not tamanho or tamanho not in permitidos:
        raise TamanhoInvalidoError(tamanho or None)
    return tamanho
