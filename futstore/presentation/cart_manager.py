# futstore/presentation/cart_manager.py
# Gerencia a persistência do Carrinho de Compras na sessão do Django.

import logging
from typing import Any, Dict, List

from django.http import HttpRequest

from futstore.core.entities import Carrinho, ItemCarrinho

logger = logging.getLogger(__name__)


class CartManager:
    """
    Carrega e grava o Carrinho na sessão do Django. O carrinho não tem tabela
    no banco: some quando a sessão expira e não passa de um navegador a outro.
    As regras de mesclagem ficam na entidade Carrinho.
    """

    SESSION_KEY = 'carrinho_futstore'

    def __init__(self, request: HttpRequest):
        self.request = request
        self.carrinho: Carrinho = self._load_carrinho_from_session()

    # --- Métodos de Persistência ---

    def _load_carrinho_from_session(self) -> Carrinho:
        """
        Reconstrói as linhas salvas na sessão. Uma linha corrompida é descartada
        (e registrada em log) em vez de quebrar a requisição.
        """
        raw_cart: List[Dict[str, Any]] = self.request.session.get(self.SESSION_KEY) or []

        itens = []
        for dados in raw_cart:
            try:
                itens.append(ItemCarrinho.from_dict(dados))
            except (KeyError, TypeError, ValueError, ArithmeticError) as e:
                logger.warning("Linha inválida descartada do carrinho da sessão: %r (%s)", dados, e)
        return Carrinho(itens=itens)

    def save(self):
        """Serializa as linhas (snapshots incluídos) e grava na sessão."""
        self.request.session[self.SESSION_KEY] = [item.to_dict() for item in self.carrinho.itens]
        self.request.session.modified = True

    def clear_carrinho(self):
        """Limpa o carrinho na sessão (usado após o checkout)."""
        self.carrinho.limpar()
        if self.SESSION_KEY in self.request.session:
            del self.request.session[self.SESSION_KEY]
            self.request.session.modified = True

    # --- Métodos de Consulta ---

    def get_carrinho(self) -> Carrinho:
        return self.carrinho

    def get_total_items(self) -> int:
        """Retorna a contagem total de unidades no carrinho."""
        return self.carrinho.total_itens

    def is_empty(self) -> bool:
        return self.carrinho.esta_vazio()
