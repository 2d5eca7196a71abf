class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    pass

# ===============================================
# ERROS DE VALIDAÇÃO (recuperáveis corrigindo a entrada)
# ===============================================

class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos."""
    def __init__(self, message="Os dados fornecidos são inválidos."):
        self.message = message
        super().__init__(self.message)

class CarrinhoVazioError(DadosInvalidosError):
    """Erro levantado ao tentar fazer checkout com carrinho vazio."""
    def __init__(self, message="O carrinho de compras está vazio."):
        super().__init__(message)

class EnderecoAusenteError(DadosInvalidosError):
    """Erro levantado quando não há endereço padrão nem formulário de endereço completo."""
    def __init__(self, message="Preencha o endereço de entrega!"):
        super().__init__(message)

class CpfJaCadastradoError(DadosInvalidosError):
    """O CPF informado no perfil pertence a outro usuário."""
    def __init__(self, message="Este CPF já está cadastrado em outra conta."):
        super().__init__(message)

class TamanhoInvalidoError(DadosInvalidosError):
    """Erro levantado quando o tamanho não foi selecionado ou não existe para o produto."""
    def __init__(self, tamanho=None, message=None):
        self.tamanho = tamanho
        if message is None:
            message = ("Selecione um tamanho." if not tamanho
                       else f"Tamanho '{tamanho}' indisponível.")
        super().__init__(message)

# ===============================================
# ERROS DE ENTIDADE NÃO ENCONTRADA
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    def __init__(self, message="O item solicitado não foi encontrado."):
        self.message = message
        super().__init__(self.message)

class ProdutoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro levantado quando uma camisa específica não é encontrada."""
    def __init__(self, message="O produto solicitado não foi encontrado."):
        super().__init__(message)

class PedidoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Pedidos não encontrados."""
    def __init__(self, message="Pedido não encontrado."):
        super().__init__(message)

class UsuarioNaoEncontradoError(ItemNaoEncontradoError):
    def __init__(self, message="Usuário não encontrado."):
        super().__init__(message)

# ===============================================
# ERROS DE PERSISTÊNCIA (etapas 2 a 4 do checkout)
# ===============================================

class PersistenciaError(BaseErroCore):
    """Falha de I/O com o banco de dados. O carrinho é preservado para nova tentativa."""
    def __init__(self, message="Erro ao confirmar pedido. Tente novamente."):
        self.message = message
        super().__init__(self.message)

class TempoEsgotadoError(PersistenciaError):
    """A operação no banco excedeu o tempo limite configurado."""
    def __init__(self, message="O banco de dados não respondeu a tempo. Tente novamente."):
        super().__init__(message)

class EnderecoNaoSalvoError(PersistenciaError):
    """Falha ao gravar o endereço padrão; nenhum pedido foi criado."""
    def __init__(self, message="Erro ao salvar endereço."):
        super().__init__(message)

class PerfilNaoSalvoError(PersistenciaError):
    """Falha ao gravar os dados do perfil."""
    def __init__(self, message="Erro ao salvar perfil."):
        super().__init__(message)

class PedidoNaoCriadoError(PersistenciaError):
    """Falha ao gravar o registro do pedido."""
    def __init__(self, message="Erro ao criar o pedido."):
        super().__init__(message)

class NumeroPedidoDuplicadoError(PedidoNaoCriadoError):
    """O número de pedido gerado já existe (restrição UNIQUE do banco)."""
    def __init__(self, numero_pedido: str):
        self.numero_pedido = numero_pedido
        super().__init__(f"Número de pedido {numero_pedido} já utilizado.")

class ItensPedidoNaoCriadosError(PersistenciaError):
    """
    O pedido foi criado, mas os itens não. O pedido fica sem itens até que o
    cliente tente novamente com o mesmo número ou a varredura de órfãos o trate.
    """
    def __init__(self, numero_pedido: str, pedido_id=None, message=None):
        self.numero_pedido = numero_pedido
        self.pedido_id = pedido_id
        if message is None:
            message = (f"O pedido {numero_pedido} foi registrado, mas seus itens não. "
                       "Tente novamente para concluir.")
        super().__init__(message)
