from django.db import models
from django.utils.translation import gettext_lazy as _


class PipelineStage(models.Model):

    COLOR_CHOICES = [
        ('gray', _('Gray')),
        ('blue', _('Blue')),
        ('purple', _('Purple')),
        ('yellow', _('Yellow')),
        ('green', _('Green')),
        ('red', _('Red')),
    ]

    name = models.CharField(max_length=100,unique=True,help_text="Stage name (e.g. Qualified, Negotiation)")
    order_index = models.PositiveIntegerField(default=0,db_index=True,help_text="Position on the Kanban board (lower numbers = left)")
    color = models.CharField(max_length=20,choices=COLOR_CHOICES,default='gray',help_text="Column colour used by the board and badges")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'lead_status_pipeline'
        verbose_name = "Pipeline Stage"
        verbose_name_plural = "Pipeline Stages"
        ordering = ['order_index', 'id']

    def __str__(self):
        return self.name

    DEFAULT_STAGE_NAME = 'No Stage'

    @classmethod
    def default_stage(cls):
        """Stage for new leads: 'No Stage', else the first column, else None"""
        stage = cls.objects.filter(name=cls.DEFAULT_STAGE_NAME).first()
        if stage is None:
            stage = cls.objects.order_by('order_index', 'id').first()
        return stage

    @classmethod
    def converted_stage(cls):
        """Last stage of the pipeline; leads there count as converted"""
        return cls.objects.order_by('-order_index', '-id').first()
