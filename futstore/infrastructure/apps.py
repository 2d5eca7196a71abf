from django.apps import AppConfig


class InfrastructureConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'futstore.infrastructure'
    label = 'infrastructure'
    verbose_name = 'Usuários e Endereços'
