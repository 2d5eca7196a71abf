from django.apps import AppConfig


class PresentationConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'futstore.presentation'
    label = 'presentation'
    verbose_name = 'Loja (API)'
