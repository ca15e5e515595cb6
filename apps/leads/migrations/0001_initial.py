import django.db.models.deletion
import taggit.managers
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('core', '0001_initial'),
        ('sales', '0001_initial'),
        ('taggit', '0003_taggeditem_add_unique_index'),
    ]

    operations = [
        migrations.CreateModel(
            name='Lead',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text="Lead's full name", max_length=200)),
                ('job_title', models.CharField(blank=True, help_text='Role at their company (e.g. Head of Marketing)', max_length=200)),
                ('company', models.CharField(help_text='Company the lead works for', max_length=200)),
                ('location', models.CharField(blank=True, help_text='City / country', max_length=200)),
                ('company_size', models.CharField(blank=True, choices=[('1-10', '1-10'), ('11-50', '11-50'), ('51-200', '51-200'), ('201-1000', '201-1000'), ('1000+', '1000+')], help_text='Employee head-count bracket', max_length=20)),
                ('industries', models.JSONField(blank=True, default=list, help_text='Industries the company operates in')),
                ('links', models.JSONField(blank=True, default=list, help_text='Website, LinkedIn and other URLs')),
                ('notes', models.TextField(blank=True, help_text='General notes about this lead')),
                ('next_reminder', models.DateTimeField(blank=True, db_index=True, help_text='When should the owner follow up?', null=True)),
                ('reminder_sent_at', models.DateTimeField(blank=True, help_text='When the reminder for next_reminder was sent', null=True)),
                ('amount_inr', models.DecimalField(blank=True, decimal_places=2, help_text='Expected deal value (INR)', max_digits=14, null=True)),
                ('amount_usd', models.DecimalField(blank=True, decimal_places=2, help_text='Expected deal value (USD)', max_digits=14, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='When was this lead created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='When was this lead last updated')),
                ('assigned_to', models.ForeignKey(blank=True, help_text='Sales person responsible for this lead', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='leads', to='sales.salesperson')),
                ('created_by', models.ForeignKey(blank=True, help_text='Who entered this lead', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_leads', to=settings.AUTH_USER_MODEL)),
                ('keywords', taggit.managers.TaggableManager(blank=True, help_text='A comma-separated list of tags.', through='taggit.TaggedItem', to='taggit.Tag', verbose_name='Tags')),
                ('status', models.ForeignKey(help_text='Current pipeline stage', on_delete=django.db.models.deletion.PROTECT, related_name='leads', to='core.pipelinestage')),
            ],
            options={
                'verbose_name': 'Lead',
                'verbose_name_plural': 'Leads',
                'db_table': 'leads',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['status', 'assigned_to'], name='leads_status_assigned_idx'),
                    models.Index(fields=['next_reminder', 'reminder_sent_at'], name='leads_reminder_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='LeadEmail',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('email', models.CharField(db_index=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('lead', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='emails', to='leads.lead')),
            ],
            options={
                'db_table': 'lead_emails',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='LeadPhone',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('phone', models.CharField(db_index=True, max_length=30)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('lead', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='phones', to='leads.lead')),
            ],
            options={
                'db_table': 'lead_phones',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Activity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('activity_type', models.CharField(choices=[('created', 'Created'), ('updated', 'Updated'), ('assigned', 'Assigned'), ('stage_changed', 'Stage Changed'), ('reminder_due', 'Reminder Due')], help_text='Type of activity/action', max_length=30)),
                ('description', models.TextField(help_text='Human-readable description of what happened')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='When did this activity occur')),
                ('lead', models.ForeignKey(help_text='Which lead this activity is for', on_delete=django.db.models.deletion.CASCADE, related_name='activities', to='leads.lead')),
                ('user', models.ForeignKey(blank=True, help_text='Who performed this action', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activities', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Activity',
                'verbose_name_plural': 'Activities',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['lead', '-created_at'], name='activity_lead_created_idx')],
            },
        ),
    ]
