"""
Lead visibility rules shared by list, kanban, export and dashboards
"""
from django.db.models import Q

from .models import Lead


def get_visible_leads(user):
    """
    Leads the given user may see.

    - Admins: every lead
    - Sales users: leads assigned to their sales-person record or created by them
    """
    leads = Lead.objects.select_related('status', 'assigned_to', 'created_by')

    if user.is_admin():
        return leads

    sales_person = user.get_sales_person()
    condition = Q(created_by=user)
    if sales_person is not None:
        condition |= Q(assigned_to=sales_person)

    return leads.filter(condition)


def can_view_lead(user, lead):
    if user.is_admin():
        return True

    if lead.created_by_id == user.id:
        return True

    sales_person = user.get_sales_person()
    return sales_person is not None and lead.assigned_to_id == sales_person.id
