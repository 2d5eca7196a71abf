import logging

from django.conf import settings
from rest_framework import viewsets, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework.response import Response

from futstore.catalog.models import Camisa as CamisaModel
from futstore.core.dependency_injection import (
    get_gerenciar_carrinho_use_case,
    get_gerenciar_endereco_use_case,
    get_gerenciar_perfil_use_case,
    get_finalizar_checkout_use_case,
    get_listar_pedidos_do_usuario_use_case,
    get_detalhar_pedido_use_case,
)
from futstore.core.exceptions import (
    BaseErroCore,
    DadosInvalidosError,
    ItemNaoEncontradoError,
    ItensPedidoNaoCriadosError,
    PersistenciaError,
)
from futstore.core.precos import resumo_carrinho

from .cart_manager import CartManager
from .serializers import (
    CamisaSerializer,
    CarrinhoSerializer,
    AdicionarItemCarrinhoSerializer,
    AtualizarItemCarrinhoSerializer,
    RemoverItemCarrinhoSerializer,
    EnderecoSerializer,
    PerfilSerializer,
    CheckoutSerializer,
    PedidoSerializer,
)

logger = logging.getLogger(__name__)


# ====================================================================
# TRADUÇÃO DE ERROS DA CORE PARA HTTP
# ====================================================================

def resposta_de_erro(erro: BaseErroCore) -> Response:
    """Converte uma exceção da Core na resposta HTTP correspondente."""
    if isinstance(erro, ItensPedidoNaoCriadosError):
        # O cliente reenvia o checkout com este número para concluir o mesmo pedido
        return Response(
            {'message': erro.message, 'numero_pedido': erro.numero_pedido},
            status=status.HTTP_502_BAD_GATEWAY,
        )
    if isinstance(erro, DadosInvalidosError):
        return Response({'message': erro.message}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(erro, ItemNaoEncontradoError):
        return Response({'message': erro.message}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(erro, PersistenciaError):
        logger.warning("Falha de persistência respondida com 503: %s", erro.message)
        return Response({'message': erro.message}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    raise erro


# ====================================================================
# CATÁLOGO
# ====================================================================

class CamisaViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API somente leitura do catálogo de camisas.
    """
    queryset = CamisaModel.objects.all()
    serializer_class = CamisaSerializer
    permission_classes = [AllowAny]


# ====================================================================
# CARRINHO
# ====================================================================

class CarrinhoAPIView(APIView):
    """
    API View para o carrinho da sessão atual. Visitantes também têm carrinho;
    o login só é exigido no checkout.
    """
    permission_classes = [AllowAny]

    def _resposta(self, manager: CartManager, status_code=status.HTTP_200_OK) -> Response:
        carrinho = manager.get_carrinho()
        resumo = resumo_carrinho(carrinho, settings.FRETE_GRATIS_A_PARTIR, settings.FRETE_FIXO)
        serializer = CarrinhoSerializer(carrinho, context={'resumo': resumo})
        return Response(serializer.data, status=status_code)

    def get(self, request):
        """Retorna as linhas do carrinho com subtotal, frete e total."""
        return self._resposta(CartManager(request))

    def post(self, request):
        """Adiciona uma camisa (produto + tamanho) ao carrinho."""
        serializer = AdicionarItemCarrinhoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        manager = CartManager(request)
        try:
            get_gerenciar_carrinho_use_case().adicionar_item(
                carrinho=manager.get_carrinho(), **serializer.validated_data
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        manager.save()
        return self._resposta(manager, status.HTTP_201_CREATED)

    def patch(self, request):
        """Altera a quantidade e/ou o tamanho de uma linha."""
        serializer = AtualizarItemCarrinhoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        manager = CartManager(request)
        carrinho = manager.get_carrinho()
        gerenciar_carrinho_uc = get_gerenciar_carrinho_use_case()
        try:
            tamanho = dados['tamanho']
            if 'quantidade' in dados:
                gerenciar_carrinho_uc.atualizar_quantidade(carrinho, dados['produto_id'], tamanho, dados['quantidade'])
            if 'tamanho_novo' in dados:
                gerenciar_carrinho_uc.atualizar_tamanho(carrinho, dados['produto_id'], tamanho, dados['tamanho_novo'])
        except BaseErroCore as e:
            return resposta_de_erro(e)
        manager.save()
        return self._resposta(manager)

    def delete(self, request):
        """Remove uma linha; sem produto_id, esvazia o carrinho."""
        manager = CartManager(request)
        if not request.data.get('produto_id'):
            manager.clear_carrinho()
            return self._resposta(manager)

        serializer = RemoverItemCarrinhoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        get_gerenciar_carrinho_use_case().remover_item(manager.get_carrinho(), **serializer.validated_data)
        manager.save()
        return self._resposta(manager)


# ====================================================================
# ENDEREÇO PADRÃO
# ====================================================================

class EnderecoAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            endereco = get_gerenciar_endereco_use_case().obter_padrao(request.user.id)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        if endereco is None:
            return Response({'message': 'Nenhum endereço cadastrado.'}, status=status.HTTP_404_NOT_FOUND)
        return Response(EnderecoSerializer(endereco).data)

    def put(self, request):
        serializer = EnderecoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            endereco = get_gerenciar_endereco_use_case().salvar_padrao(request.user.id, serializer.validated_data)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(EnderecoSerializer(endereco).data)


# ====================================================================
# PERFIL
# ====================================================================

class PerfilAPIView(APIView):
    """Nome completo, telefone e CPF do usuário logado."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            usuario = get_gerenciar_perfil_use_case().obter(request.user.id)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PerfilSerializer(usuario).data)

    def put(self, request):
        serializer = PerfilSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            usuario = get_gerenciar_perfil_use_case().atualizar(request.user.id, serializer.validated_data)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PerfilSerializer(usuario).data)


# ====================================================================
# CHECKOUT
# ====================================================================

class CheckoutAPIView(APIView):
    """
    API View para finalizar o pedido com o carrinho da sessão.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        manager = CartManager(request)
        try:
            resultado = get_finalizar_checkout_use_case().executar(
                carrinho=manager.get_carrinho(),
                usuario_id=request.user.id,
                forma_pagamento=dados['forma_pagamento'],
                dados_endereco=dados.get('endereco'),
                numero_pedido_pendente=dados.get('numero_pedido_pendente') or None,
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)

        manager.clear_carrinho()
        return Response(
            {
                'message': 'Pedido confirmado!',
                'numero_pedido': resultado.numero_pedido,
                'total': str(resultado.pedido.total),
                'pedido': PedidoSerializer(resultado.pedido).data,
            },
            status=status.HTTP_201_CREATED,
        )


# ====================================================================
# PEDIDOS DO CLIENTE
# ====================================================================

class PedidosAPIView(APIView):
    """Histórico de pedidos do usuário logado, do mais recente ao mais antigo."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            pedidos = get_listar_pedidos_do_usuario_use_case().executar(request.user.id)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedidos, many=True).data)


class DetalhePedidoAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pk=None, numero=None):
        detalhar_pedido_uc = get_detalhar_pedido_use_case()
        try:
            if numero is not None:
                pedido = detalhar_pedido_uc.por_numero(request.user.id, numero)
            else:
                pedido = detalhar_pedido_uc.executar(request.user.id, pk)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedido).data)
