from django.db import migrations, models
import futstore.catalog.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Camisa',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nome', models.CharField(max_length=255, verbose_name='Nome da Camisa')),
                ('slug', models.SlugField(editable=False, max_length=255, unique=True)),
                ('time', models.CharField(max_length=100, verbose_name='Time')),
                ('descricao', models.TextField(blank=True, verbose_name='Descrição Detalhada')),
                ('preco', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Preço de Venda')),
                ('preco_original', models.DecimalField(blank=True, decimal_places=2, help_text='Preço "de" exibido riscado quando a camisa está em promoção', max_digits=10, null=True)),
                ('estoque', models.PositiveIntegerField(default=0, verbose_name='Estoque Atual')),
                ('imagens', models.JSONField(blank=True, default=list)),
                ('tamanhos', models.JSONField(default=futstore.catalog.models.tamanhos_padrao)),
                ('categoria', models.CharField(blank=True, choices=[('brasileiro', 'Brasileiro'), ('europeu', 'Europeu'), ('selecoes', 'Seleções')], max_length=20)),
                ('em_promocao', models.BooleanField(default=False)),
                ('em_destaque', models.BooleanField(default=False)),
                ('data_criacao', models.DateTimeField(auto_now_add=True)),
                ('data_atualizacao', models.DateTimeField(auto_now=True, null=True)),
            ],
            options={
                'verbose_name': 'Camisa',
                'verbose_name_plural': 'Camisas',
                'db_table': 'catalogo_camisa',
                'ordering': ['nome'],
            },
        ),
    ]
