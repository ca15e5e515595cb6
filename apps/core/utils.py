"""
Helpers for the dashboard and analytics pages
"""
from collections import OrderedDict

from django.db.models import Count

from apps.core.models import PipelineStage


def percentage(part, whole):
    return round(part / whole * 100, 1) if whole else 0


def build_stage_breakdown(leads_qs):
    """
    One row per pipeline stage (in board order) with its lead count.

    Returns:
        list of dicts: stage, name, color, count, percentage
    """
    total = leads_qs.count()

    stage_counts = leads_qs.order_by().values('status').annotate(count=Count('id'))
    stage_count_map = {item['status']: item['count'] for item in stage_counts}

    rows = []
    for stage in PipelineStage.objects.order_by('order_index', 'id'):
        count = stage_count_map.get(stage.id, 0)
        rows.append({
            'stage': stage,
            'name': stage.name,
            'color': stage.color,
            'count': count,
            'percentage': percentage(count, total),
        })
    return rows


def build_industry_breakdown(leads_qs):
    """
    Totals and conversion rate per industry.

    A lead tagged with several industries counts once for each of them.
    Leads without an industry are grouped under 'Unspecified'.
    Sorted by total, largest first.
    """
    converted_stage = PipelineStage.converted_stage()
    converted_id = converted_stage.id if converted_stage else None

    stats = OrderedDict()
    for industries, status_id in leads_qs.values_list('industries', 'status_id'):
        names = [name.strip() for name in (industries or []) if name and name.strip()]
        for name in names or ['Unspecified']:
            row = stats.setdefault(name, {'industry': name, 'total': 0, 'converted': 0})
            row['total'] += 1
            if converted_id is not None and status_id == converted_id:
                row['converted'] += 1

    rows = list(stats.values())
    for row in rows:
        row['conversion_rate'] = percentage(row['converted'], row['total'])

    rows.sort(key=lambda r: (-r['total'], r['industry']))
    return rows
