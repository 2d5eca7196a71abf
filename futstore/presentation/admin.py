# Configuração da interface administrativa do Django para os modelos da FutStore.

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from futstore.infrastructure.models import Usuario, Endereco
from futstore.catalog.models import Camisa
from futstore.vendas.models import Pedido, ItemPedido

# ====================================================================
# 1. USUÁRIOS E ENDEREÇOS
# ====================================================================

class EnderecoInline(admin.StackedInline):
    model = Endereco
    extra = 0


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Usuário com login por e-mail (não existe o campo username)."""

    list_display = ('email', 'nome_completo', 'telefone', 'is_staff', 'is_active')
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Informações de Perfil', {'fields': ('nome_completo', 'telefone', 'cpf')}),
        ('Permissões', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Datas', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {'classes': ('wide',), 'fields': ('email', 'nome_completo', 'password1', 'password2')}),
    )
    search_fields = ('email', 'nome_completo', 'cpf')
    ordering = ('email',)
    inlines = [EnderecoInline]


@admin.register(Endereco)
class EnderecoAdmin(admin.ModelAdmin):
    list_display = ('usuario', 'cidade', 'estado', 'cep', 'is_padrao')
    list_filter = ('estado', 'is_padrao')
    search_fields = ('usuario__email', 'cep', 'cidade')


# ====================================================================
# 2. CATÁLOGO
# ====================================================================

@admin.register(Camisa)
class CamisaAdmin(admin.ModelAdmin):
    list_display = ('nome', 'time', 'categoria', 'preco', 'estoque', 'em_promocao', 'em_destaque', 'avaliacao', 'visualizacoes')
    list_filter = ('categoria', 'em_promocao', 'em_destaque')
    list_editable = ('preco', 'estoque', 'em_promocao', 'em_destaque')
    search_fields = ('nome', 'time')


# ====================================================================
# 3. PEDIDOS
# ====================================================================

class ItemPedidoInline(admin.TabularInline):
    """Itens são snapshots da compra: somente leitura."""
    model = ItemPedido
    extra = 0
    can_delete = False
    readonly_fields = ('produto', 'nome_produto', 'imagem_produto', 'tamanho', 'quantidade', 'preco_unitario')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Pedido)
class PedidoAdmin(admin.ModelAdmin):
    list_display = ('numero', 'usuario', 'status', 'forma_pagamento', 'total', 'data_criacao')
    list_filter = ('status', 'forma_pagamento', 'data_criacao')
    search_fields = ('numero', 'usuario__email')
    readonly_fields = ('numero', 'usuario', 'total', 'forma_pagamento', 'endereco_entrega', 'data_criacao')
    inlines = [ItemPedidoInline]
