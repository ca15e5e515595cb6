import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SalesPerson',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text="Sales person's full name", max_length=200)),
                ('email', models.EmailField(help_text='Work email (also the login email)', max_length=255, unique=True)),
                ('phone', models.CharField(blank=True, help_text='Contact number, at least 10 digits', max_length=30)),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive')], db_index=True, default='active', help_text='Inactive sales persons are skipped by auto-assign', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, help_text='Admin who onboarded this sales person', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_sales_persons', to=settings.AUTH_USER_MODEL)),
                ('user', models.OneToOneField(blank=True, help_text='Login account of this sales person', null=True, on_delete=django.db.models.deletion.CASCADE, related_name='sales_person', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Sales Person',
                'verbose_name_plural': 'Sales Persons',
                'db_table': 'sales_persons',
                'ordering': ['created_at', 'id'],
            },
        ),
    ]
