# futstore/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositórios)
DEVE seguir para se conectar à camada Core (Casos de Uso). Cada chamada é uma
escrita/leitura atômica isolada; não há transação entre chamadas.
"""

from typing import Protocol, List, Optional, Dict
from abc import abstractmethod
from datetime import datetime
from decimal import Decimal

from futstore.core.entities import Camisa, Endereco, Pedido, ItemPedido, Usuario


# ====================================================================
# REPOSITÓRIOS (Portas de Persistência)
# ====================================================================

class ICamisaRepository(Protocol):
    """Protocolo para a busca de Camisas do catálogo."""

    @abstractmethod
    def buscar_por_id(self, produto_id: str) -> Optional[Camisa]: ...

    @abstractmethod
    def listar(self) -> List[Camisa]: ...


class IUsuarioRepository(Protocol):
    """Protocolo para os dados de perfil do usuário."""

    @abstractmethod
    def buscar_por_id(self, usuario_id: int) -> Optional[Usuario]: ...

    @abstractmethod
    def atualizar_perfil(self, usuario_id: int, dados: Dict[str, Optional[str]]) -> Usuario:
        """
        Grava nome completo, telefone e CPF. Levanta CpfJaCadastradoError quando
        o CPF pertence a outra conta e PerfilNaoSalvoError nas demais falhas.
        """
        ...


class IEnderecoRepository(Protocol):
    """Protocolo para o endereço padrão do usuário."""

    @abstractmethod
    def buscar_padrao(self, usuario_id: int) -> Optional[Endereco]: ...

    @abstractmethod
    def salvar_padrao(self, usuario_id: int, dados: Dict[str, Optional[str]]) -> Endereco:
        """
        Cria o endereço padrão ou atualiza no lugar o que já existe.
        Levanta EnderecoNaoSalvoError (ou TempoEsgotadoError) em falha.
        """
        ...


class IPedidoRepository(Protocol):
    """Protocolo para a persistência e consulta de Pedidos."""

    @abstractmethod
    def criar_pedido(
        self,
        usuario_id: int,
        numero: str,
        total: Decimal,
        forma_pagamento: str,
        endereco_entrega: Dict[str, Optional[str]],
        status: str,
    ) -> Pedido:
        """
        Insere o registro do pedido. Levanta NumeroPedidoDuplicadoError quando o
        número já existe e PedidoNaoCriadoError nas demais falhas.
        """
        ...

    @abstractmethod
    def criar_itens(self, pedido_id: int, itens: List[ItemPedido]) -> List[ItemPedido]:
        """Inserção em lote, tudo ou nada. Levanta PersistenciaError em falha."""
        ...

    @abstractmethod
    def buscar_por_id(self, pedido_id: int) -> Optional[Pedido]: ...

    @abstractmethod
    def buscar_por_numero(self, numero: str) -> Optional[Pedido]: ...

    @abstractmethod
    def listar_por_usuario(self, usuario_id: int) -> List[Pedido]: ...

    @abstractmethod
    def listar_sem_itens(self, criado_antes_de: datetime) -> List[Pedido]: ...

    @abstractmethod
    def atualizar_status(self, pedido_id: int, novo_status: str) -> Pedido: ...
