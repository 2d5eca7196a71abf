from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='camisa',
            name='avaliacao',
            field=models.DecimalField(decimal_places=1, default=Decimal('4.5'), max_digits=2),
        ),
        migrations.AddField(
            model_name='camisa',
            name='total_avaliacoes',
            field=models.PositiveIntegerField(default=0),
        ),
        migrations.AddField(
            model_name='camisa',
            name='visualizacoes',
            field=models.PositiveIntegerField(default=0),
        ),
    ]
