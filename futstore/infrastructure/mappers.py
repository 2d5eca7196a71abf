"""
Mapeadores (Mappers) para converter entre:
1. Modelos do Django ORM
2. Entidades de Domínio (futstore.core.entities)
"""
from typing import Any, Optional

from futstore.core.entities import (
    Usuario as UsuarioEntity,
    Endereco as EnderecoEntity,
    Camisa as CamisaEntity,
    Pedido as PedidoEntity,
    ItemPedido as ItemPedidoEntity,
)


# ====================================================================
# MAPPER DO CATÁLOGO
# ====================================================================

class CamisaMapper:
    """Mapeador para Camisa (Produto)."""

    @staticmethod
    def to_entity(model: Any) -> Optional[CamisaEntity]:
        if not model: return None
        return CamisaEntity(
            id=model.id,
            nome=model.nome,
            preco=model.preco,
            time=model.time,
            descricao=model.descricao,
            preco_original=model.preco_original,
            imagens=list(model.imagens or []),
            tamanhos=list(model.tamanhos or []),
            estoque=model.estoque,
            categoria=model.categoria,
            em_promocao=model.em_promocao,
            em_destaque=model.em_destaque,
            avaliacao=model.avaliacao,
            total_avaliacoes=model.total_avaliacoes,
            visualizacoes=model.visualizacoes,
        )


# ====================================================================
# MAPPERS DE USUÁRIO E ENDEREÇO
# ====================================================================

class UsuarioMapper:
    """Mapeador para o Usuário."""

    @staticmethod
    def to_entity(model: Any) -> Optional[UsuarioEntity]:
        if not model: return None
        return UsuarioEntity(
            id=model.id,
            email=model.email,
            nome_completo=model.nome_completo or model.get_full_name(),
            telefone=model.telefone or None,
            cpf=model.cpf or None,
        )

    @staticmethod
    def aplicar_perfil(model: Any, dados: dict) -> Any:
        for campo in UsuarioEntity.CAMPOS_PERFIL:
            setattr(model, campo, dados.get(campo))
        return model


class EnderecoMapper:
    """Mapeador para Endereço."""

    CAMPOS = EnderecoEntity.CAMPOS_OBRIGATORIOS + ("complemento",)

    @staticmethod
    def to_entity(model: Any) -> Optional[EnderecoEntity]:
        if not model: return None
        return EnderecoEntity(
            id=model.id,
            usuario_id=model.usuario_id,
            cep=model.cep,
            rua=model.rua,
            numero=model.numero,
            complemento=model.complemento,
            bairro=model.bairro,
            cidade=model.cidade,
            estado=model.estado,
            is_padrao=model.is_padrao,
        )

    @classmethod
    def aplicar_dados(cls, model: Any, dados: dict) -> Any:
        """Copia os campos do formulário para o modelo (criação ou atualização no lugar)."""
        for campo in cls.CAMPOS:
            setattr(model, campo, dados.get(campo))
        return model


# ====================================================================
# MAPPERS DE PEDIDO
# ====================================================================

class ItemPedidoMapper:
    """Mapeador para Item do Pedido."""

    @staticmethod
    def to_entity(model: Any) -> Optional[ItemPedidoEntity]:
        if not model: return None
        return ItemPedidoEntity(
            id=model.id,
            pedido_id=model.pedido_id,
            produto_id=str(model.produto_id) if model.produto_id else None,
            nome_produto=model.nome_produto,
            imagem_produto=model.imagem_produto,
            tamanho=model.tamanho,
            quantidade=model.quantidade,
            preco_unitario=model.preco_unitario,
        )

    @staticmethod
    def to_model(entity: ItemPedidoEntity, model_class, pedido_id: int, produto_id: Optional[int]) -> Any:
        return model_class(
            pedido_id=pedido_id,
            produto_id=produto_id,
            nome_produto=entity.nome_produto,
            imagem_produto=entity.imagem_produto or "",
            tamanho=entity.tamanho,
            quantidade=entity.quantidade,
            preco_unitario=entity.preco_unitario,
        )


class PedidoMapper:
    """Mapeador para Pedido; os itens vêm do prefetch de `itens`."""

    @staticmethod
    def to_entity(model: Any) -> Optional[PedidoEntity]:
        if not model: return None
        return PedidoEntity(
            id=model.id,
            numero=model.numero,
            usuario_id=model.usuario_id,
            total=model.total,
            forma_pagamento=model.forma_pagamento,
            endereco_entrega=dict(model.endereco_entrega or {}),
            status=model.status,
            itens=[ItemPedidoMapper.to_entity(i) for i in model.itens.all()],
            data_criacao=model.data_criacao,
        )
