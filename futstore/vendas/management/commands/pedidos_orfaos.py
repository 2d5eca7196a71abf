"""
Lista (e opcionalmente cancela) pedidos que ficaram sem itens porque a
gravação dos itens falhou depois de o pedido ter sido criado.
"""
from datetime import timedelta

from django.core.management.base import BaseCommand

from futstore.core.dependency_injection import get_listar_pedidos_orfaos_use_case
from futstore.core.precos import formatar_reais


class Command(BaseCommand):
    help = 'Lista pedidos sem itens mais antigos que --minutos; com --cancelar, cancela-os.'

    def add_arguments(self, parser):
        parser.add_argument('--minutos', type=int, default=30)
        parser.add_argument('--cancelar', action='store_true')

    def handle(self, *args, **options):
        use_case = get_listar_pedidos_orfaos_use_case()
        orfaos = use_case.executar(idade_minima=timedelta(minutes=options['minutos']))

        if not orfaos:
            self.stdout.write(self.style.SUCCESS('Nenhum pedido sem itens.'))
            return

        for pedido in orfaos:
            self.stdout.write(
                f"{pedido.numero}  usuário={pedido.usuario_id}  total={formatar_reais(pedido.total)}  "
                f"status={pedido.status}  criado em {pedido.data_criacao:%d/%m/%Y %H:%M}"
            )

        if options['cancelar']:
            cancelados = use_case.cancelar(orfaos)
            self.stdout.write(self.style.WARNING(f'{len(cancelados)} pedido(s) cancelado(s).'))
