"""
Context processors para a aplicação presentation.
"""
from .cart_manager import CartManager


def carrinho_context(request):
    """
    Adiciona o contador do ícone do carrinho ao contexto global dos templates.
    """
    if not hasattr(request, 'session'):
        return {}
    manager = CartManager(request)
    return {
        'quantidade_itens': manager.get_total_items(),
        'total_carrinho': manager.get_carrinho().total_preco,
    }
