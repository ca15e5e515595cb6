from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='PipelineStage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Stage name (e.g. Qualified, Negotiation)', max_length=100, unique=True)),
                ('order_index', models.PositiveIntegerField(db_index=True, default=0, help_text='Position on the Kanban board (lower numbers = left)')),
                ('color', models.CharField(choices=[('gray', 'Gray'), ('blue', 'Blue'), ('purple', 'Purple'), ('yellow', 'Yellow'), ('green', 'Green'), ('red', 'Red')], default='gray', help_text='Column colour used by the board and badges', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Pipeline Stage',
                'verbose_name_plural': 'Pipeline Stages',
                'db_table': 'lead_status_pipeline',
                'ordering': ['order_index', 'id'],
            },
        ),
    ]
