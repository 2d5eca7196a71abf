# futstore/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) da aplicação.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.
"""
import logging
import re
import secrets
import string
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Dict, List, Optional

# Entidades e Regras
from futstore.core.entities import (
    Camisa, Carrinho, Endereco, ItemCarrinho, ItemPedido, Pedido, Usuario,
    TAMANHOS, FORMAS_PAGAMENTO, STATUS_CONFIRMADO, STATUS_CANCELADO,
)
from futstore.core.carrinho import validar_tamanho
from futstore.core.precos import (
    FRETE_GRATIS_A_PARTIR, FRETE_FIXO, ResumoPedido, quantizar_moeda, resumo_carrinho,
)
from futstore.core.exceptions import (
    DadosInvalidosError,
    CarrinhoVazioError,
    EnderecoAusenteError,
    NumeroPedidoDuplicadoError,
    PedidoNaoCriadoError,
    ItensPedidoNaoCriadosError,
    PersistenciaError,
    PedidoNaoEncontradoError,
    ProdutoNaoEncontradoError,
    UsuarioNaoEncontradoError,
)

# Portas (Interfaces) - Importadas do futstore/core/ports.py
from futstore.core.ports import ICamisaRepository, IUsuarioRepository, IEnderecoRepository, IPedidoRepository

logger = logging.getLogger(__name__)


# ====================================================================
# 1. FUNÇÕES AUXILIARES
# ====================================================================

_BASE36 = string.digits + string.ascii_uppercase


def _base36(numero: int) -> str:
    if numero == 0:
        return "0"
    digitos = []
    while numero:
        numero, resto = divmod(numero, 36)
        digitos.append(_BASE36[resto])
    return "".join(reversed(digitos))


def gerar_numero_pedido(agora_ms: Optional[int] = None) -> str:
    """
    Número legível do pedido: FS-<timestamp em ms na base 36>-<4 caracteres aleatórios>.
    A unicidade é garantida pela restrição UNIQUE do banco; o sufixo só reduz colisões.
    """
    if agora_ms is None:
        agora_ms = int(time.time() * 1000)
    sufixo = "".join(secrets.choice(_BASE36) for _ in range(4))
    return f"FS-{_base36(agora_ms)}-{sufixo}"


def limpar_dados_endereco(dados: Optional[Dict]) -> Optional[Dict[str, Optional[str]]]:
    """
    Normaliza um formulário de endereço.
    Retorna None quando nada foi preenchido; levanta DadosInvalidosError quando
    o formulário está incompleto ou o CEP é inválido.
    """
    if not dados:
        return None
    campos = Endereco.CAMPOS_OBRIGATORIOS + ("complemento",)
    limpos = {c: (str(dados.get(c) or "")).strip() for c in campos}
    if not any(limpos.values()):
        return None

    faltando = [c for c in Endereco.CAMPOS_OBRIGATORIOS if not limpos[c]]
    if faltando:
        raise DadosInvalidosError(f"Preencha os campos do endereço: {', '.join(faltando)}.")

    cep = re.sub(r"\D", "", limpos["cep"])
    if len(cep) != 8:
        raise DadosInvalidosError("O CEP deve ter 8 dígitos.")
    limpos["cep"] = f"{cep[:5]}-{cep[5:]}"
    limpos["estado"] = limpos["estado"].upper()
    limpos["complemento"] = limpos["complemento"] or None
    return limpos


def limpar_dados_perfil(dados: Dict) -> Dict[str, Optional[str]]:
    """Normaliza nome, telefone e CPF. Campos em branco viram vazio (nome) ou None."""
    limpos = {c: (str(dados.get(c) or "")).strip() for c in Usuario.CAMPOS_PERFIL}

    telefone = limpos["telefone"]
    if len(telefone) > 15:
        raise DadosInvalidosError("O telefone deve ter no máximo 15 caracteres.")

    cpf = re.sub(r"\D", "", limpos["cpf"])
    if cpf and len(cpf) != 11:
        raise DadosInvalidosError("O CPF deve ter 11 dígitos.")

    return {
        "nome_completo": limpos["nome_completo"],
        "telefone": telefone or None,
        "cpf": f"{cpf[:3]}.{cpf[3:6]}.{cpf[6:9]}-{cpf[9:]}" if cpf else None,
    }


# ====================================================================
# 2. CASOS DE USO DO CATÁLOGO
# ====================================================================

class DetalharProdutoUseCase:
    """Caso de Uso para obter os detalhes de uma camisa específica."""
    def __init__(self, camisa_repo: ICamisaRepository):
        self.camisa_repo = camisa_repo

    def executar(self, produto_id: str) -> Camisa:
        camisa = self.camisa_repo.buscar_por_id(produto_id)
        if not camisa:
            raise ProdutoNaoEncontradoError(f"Produto ID {produto_id} não encontrado.")
        return camisa


# ====================================================================
# 3. CASOS DE USO DO CARRINHO
# ====================================================================

class GerenciarCarrinhoUseCase:
    """
    Caso de Uso que valida as entradas vindas da tela (produto, tamanho,
    quantidade) antes de delegar às regras do Carrinho.
    """
    def __init__(self, camisa_repo: ICamisaRepository):
        self.detalhar_produto = DetalharProdutoUseCase(camisa_repo)

    @staticmethod
    def _normalizar_tamanho(tamanho: str) -> str:
        return (tamanho or "").strip().upper()

    @staticmethod
    def _tamanhos_do_produto(camisa: Camisa) -> List[str]:
        return [t for t in (camisa.tamanhos or TAMANHOS) if t in TAMANHOS]

    def adicionar_item(self, carrinho: Carrinho, produto_id: str, tamanho: str, quantidade: int = 1) -> Carrinho:
        """Adiciona a camisa no tamanho escolhido, tirando o snapshot de nome, imagem e preço."""
        if not isinstance(quantidade, int) or isinstance(quantidade, bool) or quantidade <= 0:
            raise DadosInvalidosError("A quantidade a adicionar deve ser positiva.")

        camisa = self.detalhar_produto.executar(produto_id)
        tamanho = validar_tamanho(tamanho, self._tamanhos_do_produto(camisa))

        return carrinho.adicionar_item(ItemCarrinho(
            produto_id=str(camisa.id),
            nome=camisa.nome,
            imagem=camisa.imagem_principal,
            tamanho=tamanho,
            quantidade=quantidade,
            preco_unitario=quantizar_moeda(camisa.preco),
        ))

    def remover_item(self, carrinho: Carrinho, produto_id: str, tamanho: str) -> Carrinho:
        return carrinho.remover_item(produto_id, self._normalizar_tamanho(tamanho))

    def atualizar_quantidade(self, carrinho: Carrinho, produto_id: str, tamanho: str, quantidade: int) -> Carrinho:
        if not isinstance(quantidade, int) or isinstance(quantidade, bool):
            raise DadosInvalidosError("A quantidade deve ser um número inteiro.")
        return carrinho.atualizar_quantidade(produto_id, self._normalizar_tamanho(tamanho), quantidade)

    def atualizar_tamanho(self, carrinho: Carrinho, produto_id: str, tamanho_antigo: str, tamanho_novo: str) -> Carrinho:
        """Troca o tamanho de uma linha; o novo tamanho precisa existir para a camisa."""
        tamanho_antigo = self._normalizar_tamanho(tamanho_antigo)
        if not carrinho.buscar_item(produto_id, tamanho_antigo):
            return carrinho
        camisa = self.detalhar_produto.executar(produto_id)
        tamanho_novo = validar_tamanho(tamanho_novo, self._tamanhos_do_produto(camisa))
        return carrinho.atualizar_tamanho(produto_id, tamanho_antigo, tamanho_novo)


# ====================================================================
# 4. CASOS DE USO DE ENDEREÇO E PERFIL
# ====================================================================

class GerenciarEnderecoUseCase:
    """Leitura e gravação do endereço padrão (tela de perfil)."""
    def __init__(self, endereco_repo: IEnderecoRepository):
        self.endereco_repo = endereco_repo

    def obter_padrao(self, usuario_id: int) -> Optional[Endereco]:
        return self.endereco_repo.buscar_padrao(usuario_id)

    def salvar_padrao(self, usuario_id: int, dados: Dict) -> Endereco:
        limpos = limpar_dados_endereco(dados)
        if limpos is None:
            raise EnderecoAusenteError()
        endereco = self.endereco_repo.salvar_padrao(usuario_id, limpos)
        logger.info("Endereço padrão do usuário %s salvo (id=%s).", usuario_id, endereco.id)
        return endereco


class GerenciarPerfilUseCase:
    """Leitura e gravação dos dados de perfil (nome completo, telefone e CPF)."""
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def obter(self, usuario_id: int) -> Usuario:
        usuario = self.usuario_repo.buscar_por_id(usuario_id)
        if usuario is None:
            raise UsuarioNaoEncontradoError()
        return usuario

    def atualizar(self, usuario_id: int, dados: Dict) -> Usuario:
        usuario = self.usuario_repo.atualizar_perfil(usuario_id, limpar_dados_perfil(dados))
        logger.info("Perfil do usuário %s atualizado.", usuario_id)
        return usuario


# ====================================================================
# 5. CASO DE USO DE CHECKOUT
# ====================================================================

@dataclass
class ResultadoCheckout:
    numero_pedido: str
    pedido: Pedido
    resumo: ResumoPedido


class FinalizarCheckoutUseCase:
    """
    Caso de Uso que coordena a finalização do checkout, em etapas estritamente
    sequenciais:

    1. Pré-condições (carrinho, forma de pagamento, endereço) - sem escrita.
    2. Grava o endereço informado como endereço padrão.
    3. Cria o pedido com número único e status "confirmed".
    4. Cria os itens do pedido (snapshots das linhas do carrinho).
    5. Limpa o carrinho.

    Uma falha interrompe as etapas seguintes e NÃO desfaz as anteriores. O
    carrinho só é limpo na etapa 5.
    """

    TENTATIVAS_NUMERO_PEDIDO = 3

    def __init__(
        self,
        endereco_repo: IEnderecoRepository,
        pedido_repo: IPedidoRepository,
        frete_gratis_a_partir: Decimal = FRETE_GRATIS_A_PARTIR,
        frete_fixo: Decimal = FRETE_FIXO,
        gerar_numero: Callable[[], str] = gerar_numero_pedido,
    ):
        self.endereco_repo = endereco_repo
        self.pedido_repo = pedido_repo
        self.frete_gratis_a_partir = frete_gratis_a_partir
        self.frete_fixo = frete_fixo
        self.gerar_numero = gerar_numero

    def executar(
        self,
        carrinho: Carrinho,
        usuario_id: int,
        forma_pagamento: str,
        dados_endereco: Optional[Dict] = None,
        numero_pedido_pendente: Optional[str] = None,
    ) -> ResultadoCheckout:
        """Processa o checkout e devolve o número do pedido criado."""

        # 1. Pré-condições
        if carrinho.esta_vazio():
            raise CarrinhoVazioError("Não é possível finalizar o checkout com o carrinho vazio.")

        forma_pagamento = (forma_pagamento or "").strip().lower()
        if forma_pagamento not in FORMAS_PAGAMENTO:
            raise DadosInvalidosError(f"Forma de pagamento '{forma_pagamento}' inválida.")

        formulario = limpar_dados_endereco(dados_endereco)
        endereco = None
        if formulario is None:
            endereco = self.endereco_repo.buscar_padrao(usuario_id)
            if endereco is None:
                raise EnderecoAusenteError()

        resumo = resumo_carrinho(carrinho, self.frete_gratis_a_partir, self.frete_fixo)

        # 2. Endereço: precisa estar gravado antes de qualquer pedido referenciá-lo
        if formulario is not None:
            endereco = self.endereco_repo.salvar_padrao(usuario_id, formulario)
            logger.info("Checkout: endereço padrão do usuário %s atualizado.", usuario_id)

        # 3. Pedido
        if numero_pedido_pendente:
            pedido = self._retomar_pedido(numero_pedido_pendente, usuario_id, resumo, forma_pagamento)
        else:
            pedido = self._criar_pedido(usuario_id, resumo, forma_pagamento, endereco.snapshot())

        # 4. Itens do pedido
        itens = [ItemPedido.de_item_carrinho(item, pedido.id) for item in carrinho.itens]
        try:
            pedido.itens = self.pedido_repo.criar_itens(pedido.id, itens)
        except PersistenciaError as e:
            logger.error(
                "Checkout: pedido %s (id=%s) criado SEM itens: %s", pedido.numero, pedido.id, e
            )
            raise ItensPedidoNaoCriadosError(pedido.numero, pedido.id) from e

        # 5. Commit
        carrinho.limpar()
        logger.info("Checkout concluído: pedido %s, total %s.", pedido.numero, pedido.total)
        return ResultadoCheckout(numero_pedido=pedido.numero, pedido=pedido, resumo=resumo)

    def _criar_pedido(self, usuario_id: int, resumo: ResumoPedido, forma_pagamento: str, endereco_entrega: Dict) -> Pedido:
        for tentativa in range(1, self.TENTATIVAS_NUMERO_PEDIDO + 1):
            numero = self.gerar_numero()
            try:
                pedido = self.pedido_repo.criar_pedido(
                    usuario_id=usuario_id,
                    numero=numero,
                    total=resumo.total,
                    forma_pagamento=forma_pagamento,
                    endereco_entrega=endereco_entrega,
                    status=STATUS_CONFIRMADO,
                )
            except NumeroPedidoDuplicadoError:
                logger.warning("Número de pedido %s repetido (tentativa %d).", numero, tentativa)
                continue
            logger.info("Checkout: pedido %s criado (id=%s).", pedido.numero, pedido.id)
            return pedido
        raise PedidoNaoCriadoError("Não foi possível gerar um número de pedido único.")

    def _retomar_pedido(self, numero: str, usuario_id: int, resumo: ResumoPedido, forma_pagamento: str) -> Pedido:
        """Reaproveita o pedido criado numa tentativa anterior cujos itens falharam."""
        pedido = self.pedido_repo.buscar_por_numero(numero)
        if pedido is None or pedido.usuario_id != usuario_id:
            raise PedidoNaoEncontradoError(f"Pedido {numero} não encontrado.")
        if pedido.status != STATUS_CONFIRMADO:
            raise DadosInvalidosError(f"O pedido {numero} foi cancelado; finalize um novo pedido.")
        if pedido.itens:
            raise DadosInvalidosError(f"O pedido {numero} já foi concluído.")
        if pedido.forma_pagamento != forma_pagamento:
            raise DadosInvalidosError(
                f"A forma de pagamento não confere com a do pedido {numero} ({pedido.forma_pagamento})."
            )
        if pedido.total != resumo.total:
            raise DadosInvalidosError(
                f"O carrinho mudou desde a tentativa do pedido {numero}; o total não confere."
            )
        logger.info("Checkout: retomando pedido %s sem itens.", numero)
        return pedido


# ====================================================================
# 6. CASOS DE USO DE CONSULTA DE PEDIDOS
# ====================================================================

class ListarPedidosDoUsuarioUseCase:
    """Caso de Uso para listar os pedidos de um cliente específico."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(self, usuario_id: int) -> List[Pedido]:
        return self.pedido_repo.listar_por_usuario(usuario_id)


class DetalharPedidoUseCase:
    """Busca um pedido do próprio usuário, por id ou por número."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    @staticmethod
    def _do_usuario(pedido: Optional[Pedido], usuario_id: int, referencia) -> Pedido:
        # Pedido de outro usuário é tratado como inexistente
        if pedido is None or pedido.usuario_id != usuario_id:
            raise PedidoNaoEncontradoError(f"Pedido {referencia} não encontrado.")
        return pedido

    def executar(self, usuario_id: int, pedido_id: int) -> Pedido:
        return self._do_usuario(self.pedido_repo.buscar_por_id(pedido_id), usuario_id, pedido_id)

    def por_numero(self, usuario_id: int, numero: str) -> Pedido:
        return self._do_usuario(self.pedido_repo.buscar_por_numero(numero), usuario_id, numero)


# ====================================================================
# 7. RECONCILIAÇÃO
# ====================================================================

class ListarPedidosOrfaosUseCase:
    """
    Pedidos sem nenhum item (etapa 4 do checkout falhou e o cliente não
    tentou de novo). Só considera pedidos mais velhos que `idade_minima`
    para não pegar um checkout em andamento.
    """
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(self, idade_minima: timedelta = timedelta(minutes=30), agora: Optional[datetime] = None) -> List[Pedido]:
        agora = agora or datetime.now(timezone.utc)
        return self.pedido_repo.listar_sem_itens(agora - idade_minima)

    def cancelar(self, pedidos: List[Pedido]) -> List[Pedido]:
        cancelados = []
        for pedido in pedidos:
            if pedido.status == STATUS_CANCELADO:
                continue
            cancelados.append(self.pedido_repo.atualizar_status(pedido.id, STATUS_CANCELADO))
            logger.warning("Pedido órfão %s cancelado.", pedido.numero)
        return cancelados
