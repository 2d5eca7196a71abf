from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'futstore.catalog'
    label = 'catalog'
    verbose_name = 'Catálogo de Camisas'
