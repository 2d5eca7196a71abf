from django.apps import AppConfig

class VendasConfig(AppConfig):
    name = 'futstore.vendas'
    label = 'vendas'
    verbose_name = 'Vendas e Pedidos'
    default_auto_field = 'django.db.models.BigAutoField'
