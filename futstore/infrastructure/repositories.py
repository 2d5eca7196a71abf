"""
Camada de Infraestrutura: Implementação dos Repositórios.

Esta camada traduz as operações abstratas definidas nas Portas da Core em
chamadas concretas ao Django ORM, e os erros do banco nas exceções da Core.
Cada método público é uma operação atômica isolada.
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Type

from django.apps import apps
from django.db import transaction
from django.db.utils import DatabaseError, IntegrityError
from psycopg2 import errors as pg_errors

from futstore.core.entities import Camisa, Endereco, Pedido, ItemPedido, Usuario, STATUS_CONFIRMADO
from futstore.core.ports import ICamisaRepository, IUsuarioRepository, IEnderecoRepository, IPedidoRepository
from futstore.core.exceptions import (
    PersistenciaError,
    TempoEsgotadoError,
    EnderecoNaoSalvoError,
    PerfilNaoSalvoError,
    CpfJaCadastradoError,
    UsuarioNaoEncontradoError,
    PedidoNaoCriadoError,
    NumeroPedidoDuplicadoError,
    PedidoNaoEncontradoError,
)

from .mappers import CamisaMapper, UsuarioMapper, EnderecoMapper, ItemPedidoMapper, PedidoMapper

logger = logging.getLogger(__name__)


# Helper para Lazy Loading
def get_model(app_label, model_name):
    """Busca o modelo Django de forma segura (Lazy Loading)."""
    return apps.get_model(app_label, model_name)


def _tempo_esgotado(erro: DatabaseError) -> bool:
    # O Django embrulha o erro do psycopg2; o original fica em __cause__
    return isinstance(erro, pg_errors.QueryCanceled) or isinstance(erro.__cause__, pg_errors.QueryCanceled)


@contextmanager
def traduzir_erros_banco(erro_padrao: Type[PersistenciaError] = PersistenciaError, operacao: str = ""):
    """Converte DatabaseError em TempoEsgotadoError ou no erro de persistência da operação."""
    try:
        yield
    except DatabaseError as e:
        if _tempo_esgotado(e):
            logger.error("Tempo esgotado no banco durante '%s': %s", operacao, e)
            raise TempoEsgotadoError() from e
        logger.error("Falha no banco durante '%s': %s", operacao, e)
        raise erro_padrao() from e


def _id_numerico(valor) -> Optional[int]:
    try:
        return int(valor)
    except (TypeError, ValueError):
        return None


# ====================================================================
# 1. CATÁLOGO
# ====================================================================

class CamisaRepositoryDjango(ICamisaRepository):
    """Implementação do CamisaRepository usando o Django ORM."""

    @property
    def CamisaModel(self):
        return get_model('catalog', 'Camisa')

    def buscar_por_id(self, produto_id: str) -> Optional[Camisa]:
        pk = _id_numerico(produto_id)
        if pk is None:
            return None
        with traduzir_erros_banco(operacao="buscar camisa"):
            try:
                return CamisaMapper.to_entity(self.CamisaModel.objects.get(pk=pk))
            except self.CamisaModel.DoesNotExist:
                return None

    def listar(self) -> List[Camisa]:
        with traduzir_erros_banco(operacao="listar camisas"):
            return [CamisaMapper.to_entity(model) for model in self.CamisaModel.objects.all()]


# ====================================================================
# 2. PERFIL DO USUÁRIO
# ====================================================================

class UsuarioRepositoryDjango(IUsuarioRepository):
    """Implementação do UsuarioRepository usando o Django ORM."""

    @property
    def UsuarioModel(self):
        return get_model('infrastructure', 'Usuario')

    def buscar_por_id(self, usuario_id: int) -> Optional[Usuario]:
        with traduzir_erros_banco(operacao="buscar usuário"):
            model = self.UsuarioModel.objects.filter(pk=usuario_id).first()
        return UsuarioMapper.to_entity(model)

    def atualizar_perfil(self, usuario_id: int, dados: Dict[str, Optional[str]]) -> Usuario:
        with traduzir_erros_banco(PerfilNaoSalvoError, "atualizar perfil"):
            model = self.UsuarioModel.objects.filter(pk=usuario_id).first()
            if model is None:
                raise UsuarioNaoEncontradoError()
            UsuarioMapper.aplicar_perfil(model, dados)
            try:
                with transaction.atomic():
                    model.save(update_fields=list(Usuario.CAMPOS_PERFIL))
            except IntegrityError:
                cpf = dados.get("cpf")
                if cpf and self.UsuarioModel.objects.filter(cpf=cpf).exclude(pk=usuario_id).exists():
                    raise CpfJaCadastradoError()
                raise
        return UsuarioMapper.to_entity(model)


# ====================================================================
# 3. ENDEREÇO PADRÃO
# ====================================================================

class EnderecoRepositoryDjango(IEnderecoRepository):
    """Implementação do EnderecoRepository usando o Django ORM."""

    @property
    def EnderecoModel(self):
        return get_model('infrastructure', 'Endereco')

    def buscar_padrao(self, usuario_id: int) -> Optional[Endereco]:
        with traduzir_erros_banco(operacao="buscar endereço padrão"):
            model = self.EnderecoModel.objects.filter(usuario_id=usuario_id, is_padrao=True).first()
        return EnderecoMapper.to_entity(model)

    def salvar_padrao(self, usuario_id: int, dados: Dict[str, Optional[str]]) -> Endereco:
        """Atualiza no lugar o endereço padrão existente ou cria o primeiro."""
        with traduzir_erros_banco(EnderecoNaoSalvoError, "salvar endereço padrão"):
            with transaction.atomic():
                model = (
                    self.EnderecoModel.objects.select_for_update()
                    .filter(usuario_id=usuario_id, is_padrao=True)
                    .first()
                )
                if model is None:
                    model = self.EnderecoModel(usuario_id=usuario_id, is_padrao=True)
                EnderecoMapper.aplicar_dados(model, dados)
                model.save()
        return EnderecoMapper.to_entity(model)


# ====================================================================
# 4. PEDIDOS
# ====================================================================

class PedidoRepositoryDjango(IPedidoRepository):
    """Implementação do PedidoRepository usando o Django ORM."""

    @property
    def PedidoModel(self):
        return get_model('vendas', 'Pedido')

    @property
    def ItemPedidoModel(self):
        return get_model('vendas', 'ItemPedido')

    @property
    def CamisaModel(self):
        return get_model('catalog', 'Camisa')

    def _consulta(self):
        return self.PedidoModel.objects.prefetch_related('itens')

    def criar_pedido(
        self,
        usuario_id: int,
        numero: str,
        total: Decimal,
        forma_pagamento: str,
        endereco_entrega: Dict[str, Optional[str]],
        status: str = STATUS_CONFIRMADO,
    ) -> Pedido:
        with traduzir_erros_banco(PedidoNaoCriadoError, "criar pedido"):
            try:
                with transaction.atomic():
                    model = self.PedidoModel.objects.create(
                        usuario_id=usuario_id,
                        numero=numero,
                        total=total,
                        forma_pagamento=forma_pagamento,
                        endereco_entrega=endereco_entrega,
                        status=status,
                    )
            except IntegrityError:
                if self.PedidoModel.objects.filter(numero=numero).exists():
                    raise NumeroPedidoDuplicadoError(numero)
                raise
        return PedidoMapper.to_entity(model)

    def criar_itens(self, pedido_id: int, itens: List[ItemPedido]) -> List[ItemPedido]:
        """Grava todos os itens numa única inserção em lote; nenhum item fica pela metade."""
        with traduzir_erros_banco(operacao="criar itens do pedido"):
            ids_produtos = {_id_numerico(i.produto_id) for i in itens} - {None}
            # Produto removido do catálogo não impede a venda: o snapshot basta
            existentes = set(
                self.CamisaModel.objects.filter(pk__in=ids_produtos).values_list('pk', flat=True)
            )
            models_itens = [
                ItemPedidoMapper.to_model(
                    item,
                    self.ItemPedidoModel,
                    pedido_id,
                    _id_numerico(item.produto_id) if _id_numerico(item.produto_id) in existentes else None,
                )
                for item in itens
            ]
            with transaction.atomic():
                self.ItemPedidoModel.objects.bulk_create(models_itens)
            criados = self.ItemPedidoModel.objects.filter(pedido_id=pedido_id).order_by('id')
            return [ItemPedidoMapper.to_entity(m) for m in criados]

    def buscar_por_id(self, pedido_id: int) -> Optional[Pedido]:
        with traduzir_erros_banco(operacao="buscar pedido"):
            try:
                return PedidoMapper.to_entity(self._consulta().get(pk=pedido_id))
            except self.PedidoModel.DoesNotExist:
                return None

    def buscar_por_numero(self, numero: str) -> Optional[Pedido]:
        with traduzir_erros_banco(operacao="buscar pedido por número"):
            try:
                return PedidoMapper.to_entity(self._consulta().get(numero=numero))
            except self.PedidoModel.DoesNotExist:
                return None

    def listar_por_usuario(self, usuario_id: int) -> List[Pedido]:
        with traduzir_erros_banco(operacao="listar pedidos"):
            qs = self._consulta().filter(usuario_id=usuario_id).order_by('-data_criacao')
            return [PedidoMapper.to_entity(model) for model in qs]

    def listar_sem_itens(self, criado_antes_de: datetime) -> List[Pedido]:
        with traduzir_erros_banco(operacao="listar pedidos sem itens"):
            qs = self._consulta().filter(
                data_criacao__lt=criado_antes_de, itens__isnull=True
            ).order_by('data_criacao')
            return [PedidoMapper.to_entity(model) for model in qs]

    def atualizar_status(self, pedido_id: int, novo_status: str) -> Pedido:
        with traduzir_erros_banco(operacao="atualizar status do pedido"):
            atualizados = self.PedidoModel.objects.filter(pk=pedido_id).update(status=novo_status)
            if not atualizados:
                raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não existe para atualização.")
            return PedidoMapper.to_entity(self._consulta().get(pk=pedido_id))
