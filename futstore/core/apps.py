# futstore/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    name = 'futstore.core'
    label = 'core'
    verbose_name = 'Regras do Carrinho e do Checkout (Core)'

    # Camada sem modelos: a persistência fica na Infraestrutura
    default_auto_field = 'django.db.models.BigAutoField'
