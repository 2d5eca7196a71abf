# futstore/core/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).
Responsável por instanciar os Use Cases com os Repositórios concretos da
camada de Infraestrutura e com os parâmetros de frete vindos do settings.
"""
from django.conf import settings

from futstore.infrastructure.repositories import (
    CamisaRepositoryDjango,
    UsuarioRepositoryDjango,
    EnderecoRepositoryDjango,
    PedidoRepositoryDjango,
)
from .use_cases import (
    DetalharProdutoUseCase,
    GerenciarCarrinhoUseCase,
    GerenciarEnderecoUseCase,
    GerenciarPerfilUseCase,
    FinalizarCheckoutUseCase,
    ListarPedidosDoUsuarioUseCase,
    DetalharPedidoUseCase,
    ListarPedidosOrfaosUseCase,
)

# Repositórios Concretos
camisa_repo = CamisaRepositoryDjango()
usuario_repo = UsuarioRepositoryDjango()
endereco_repo = EnderecoRepositoryDjango()
pedido_repo = PedidoRepositoryDjango()

# ====================================================================
# Use Cases de Catálogo/Carrinho
# ====================================================================

def get_detalhar_produto_use_case() -> DetalharProdutoUseCase:
    return DetalharProdutoUseCase(camisa_repo)

def get_gerenciar_carrinho_use_case() -> GerenciarCarrinhoUseCase:
    return GerenciarCarrinhoUseCase(camisa_repo)


# ====================================================================
# Use Cases de Checkout/Pedidos
# ====================================================================

def get_gerenciar_endereco_use_case() -> GerenciarEnderecoUseCase:
    return GerenciarEnderecoUseCase(endereco_repo)

def get_gerenciar_perfil_use_case() -> GerenciarPerfilUseCase:
    return GerenciarPerfilUseCase(usuario_repo)

def get_finalizar_checkout_use_case() -> FinalizarCheckoutUseCase:
    return FinalizarCheckoutUseCase(
        endereco_repo=endereco_repo,
        pedido_repo=pedido_repo,
        frete_gratis_a_partir=settings.FRETE_GRATIS_A_PARTIR,
        frete_fixo=settings.FRETE_FIXO,
    )

def get_listar_pedidos_do_usuario_use_case() -> ListarPedidosDoUsuarioUseCase:
    return ListarPedidosDoUsuarioUseCase(pedido_repo)

def get_detalhar_pedido_use_case() -> DetalharPedidoUseCase:
    return DetalharPedidoUseCase(pedido_repo)

def get_listar_pedidos_orfaos_use_case() -> ListarPedidosOrfaosUseCase:
    return ListarPedidosOrfaosUseCase(pedido_repo)
