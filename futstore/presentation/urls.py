"""
Define as rotas de API REST da loja: catálogo, carrinho da sessão,
endereço padrão, checkout e pedidos do cliente.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from . import views

router = DefaultRouter()
router.register(r'camisas', views.CamisaViewSet)


urlpatterns = [
    # ====================================================================
    # 1. CATÁLOGO
    # ====================================================================
    path('api/', include(router.urls)),  # /api/camisas/

    # ====================================================================
    # 2. COMPRA (CARRINHO E CHECKOUT)
    # ====================================================================
    path('api/carrinho/', views.CarrinhoAPIView.as_view(), name='api_carrinho'),
    path('api/checkout/', views.CheckoutAPIView.as_view(), name='api_checkout'),

    # ====================================================================
    # 3. ÁREA DO CLIENTE
    # ====================================================================
    path('api/endereco/', views.EnderecoAPIView.as_view(), name='api_endereco'),
    path('api/perfil/', views.PerfilAPIView.as_view(), name='api_perfil'),
    path('api/pedidos/', views.PedidosAPIView.as_view(), name='api_pedidos'),
    path('api/pedidos/<int:pk>/', views.DetalhePedidoAPIView.as_view(), name='api_detalhe_pedido'),
    path('api/pedidos/numero/<str:numero>/', views.DetalhePedidoAPIView.as_view(), name='api_pedido_confirmado'),

    # ====================================================================
    # 4. AUTENTICAÇÃO (JWT)
    # ====================================================================
    path('api/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
