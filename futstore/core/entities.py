from dataclasses import dataclass, field, asdict
from decimal import Decimal
from datetime import datetime
from typing import List, Optional, Dict

from futstore.core import carrinho as regras

# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

TAMANHOS = ("P", "M", "G", "GG")

FORMAS_PAGAMENTO = ("card", "pix")

STATUS_CONFIRMADO = "confirmed"
STATUS_CANCELADO = "cancelled"


@dataclass
class Usuario:
    """Entidade do Usuário com os dados de perfil editáveis pelo cliente."""
    id: int
    email: str = ""
    nome_completo: str = ""
    telefone: Optional[str] = None
    cpf: Optional[str] = None

    CAMPOS_PERFIL = ("nome_completo", "telefone", "cpf")


@dataclass
class Endereco:
    """Entidade do Endereço de Entrega. Cada usuário tem no máximo um endereço padrão."""
    usuario_id: int
    cep: str
    rua: str
    numero: str
    bairro: str
    cidade: str
    estado: str
    complemento: Optional[str] = None
    is_padrao: bool = True
    id: Optional[int] = None

    CAMPOS_OBRIGATORIOS = ("cep", "rua", "numero", "bairro", "cidade", "estado")

    def snapshot(self) -> Dict[str, Optional[str]]:
        """Cópia dos dados de entrega gravada no pedido (sem id nem usuário)."""
        return {
            "cep": self.cep,
            "rua": self.rua,
            "numero": self.numero,
            "complemento": self.complemento,
            "bairro": self.bairro,
            "cidade": self.cidade,
            "estado": self.estado,
        }


@dataclass
class Camisa:
    """Entidade da Camisa (Produto) do catálogo."""
    id: int
    nome: str
    preco: Decimal
    time: str = ""
    descricao: str = ""
    preco_original: Optional[Decimal] = None
    imagens: List[str] = field(default_factory=list)
    tamanhos: List[str] = field(default_factory=lambda: list(TAMANHOS))
    estoque: int = 0
    categoria: str = ""
    em_promocao: bool = False
    em_destaque: bool = False
    avaliacao: Decimal = Decimal("4.5")
    total_avaliacoes: int = 0
    visualizacoes: int = 0

    @property
    def imagem_principal(self) -> str:
        return self.imagens[0] if self.imagens else ""

    @property
    def desconto_percentual(self) -> int:
        if not self.preco_original or self.preco_original <= self.preco:
            return 0
        return int((Decimal("1") - self.preco / self.preco_original) * 100)


@dataclass(frozen=True)
class ItemCarrinho:
    """
    Linha do carrinho. A identidade é o par (produto_id, tamanho); nome, imagem e
    preço são snapshots tirados no momento em que a linha entrou no carrinho.
    """
    produto_id: str
    nome: str
    imagem: str
    tamanho: str
    quantidade: int
    preco_unitario: Decimal

    @property
    def chave(self):
        return (self.produto_id, self.tamanho)

    @property
    def subtotal(self) -> Decimal:
        """Calcula o subtotal do item."""
        return self.preco_unitario * self.quantidade

    def to_dict(self) -> dict:
        dados = asdict(self)
        dados["preco_unitario"] = str(self.preco_unitario)
        return dados

    @classmethod
    def from_dict(cls, dados: dict) -> "ItemCarrinho":
        return cls(
            produto_id=str(dados["produto_id"]),
            nome=dados.get("nome", ""),
            imagem=dados.get("imagem", ""),
            tamanho=dados["tamanho"],
            quantidade=int(dados["quantidade"]),
            preco_unitario=Decimal(str(dados["preco_unitario"])),
        )


@dataclass
class Carrinho:
    """
    Entidade do Carrinho de Compras, pertencente à sessão.
    Os métodos abaixo são os únicos que alteram `itens`.
    """
    itens: List[ItemCarrinho] = field(default_factory=list)

    def adicionar_item(self, item: ItemCarrinho) -> "Carrinho":
        self.itens = regras.adicionar_item(self.itens, item)
        return self

    def remover_item(self, produto_id: str, tamanho: str) -> "Carrinho":
        self.itens = regras.remover_item(self.itens, produto_id, tamanho)
        return self

    def atualizar_quantidade(self, produto_id: str, tamanho: str, quantidade: int) -> "Carrinho":
        self.itens = regras.atualizar_quantidade(self.itens, produto_id, tamanho, quantidade)
        return self

    def atualizar_tamanho(self, produto_id: str, tamanho_antigo: str, tamanho_novo: str) -> "Carrinho":
        self.itens = regras.atualizar_tamanho(self.itens, produto_id, tamanho_antigo, tamanho_novo)
        return self

    def limpar(self) -> "Carrinho":
        self.itens = []
        return self

    def buscar_item(self, produto_id: str, tamanho: str) -> Optional[ItemCarrinho]:
        return next((i for i in self.itens if i.chave == (str(produto_id), tamanho)), None)

    def esta_vazio(self) -> bool:
        return not self.itens

    @property
    def total_itens(self) -> int:
        """Soma das quantidades (contador do ícone do carrinho)."""
        return regras.total_itens(self.itens)

    @property
    def total_preco(self) -> Decimal:
        """Subtotal, sem o frete."""
        return regras.total_preco(self.itens)


@dataclass
class ItemPedido:
    """Snapshot de um item no momento da compra (imutável)."""
    produto_id: Optional[str]
    nome_produto: str
    imagem_produto: str
    tamanho: str
    quantidade: int
    preco_unitario: Decimal
    pedido_id: Optional[int] = None
    id: Optional[int] = None

    @property
    def subtotal(self) -> Decimal:
        return self.preco_unitario * self.quantidade

    @classmethod
    def de_item_carrinho(cls, item: ItemCarrinho, pedido_id: Optional[int] = None) -> "ItemPedido":
        return cls(
            pedido_id=pedido_id,
            produto_id=item.produto_id,
            nome_produto=item.nome,
            imagem_produto=item.imagem,
            tamanho=item.tamanho,
            quantidade=item.quantidade,
            preco_unitario=item.preco_unitario,
        )


@dataclass
class Pedido:
    """Entidade do Pedido, criada somente na conclusão do checkout."""
    numero: str
    usuario_id: int
    total: Decimal
    forma_pagamento: str
    endereco_entrega: Dict[str, Optional[str]]
    status: str = STATUS_CONFIRMADO
    itens: List[ItemPedido] = field(default_factory=list)
    id: Optional[int] = None
    data_criacao: Optional[datetime] = None
