"""
Lead business operations: intake, editing and auto-assignment.
"""

import logging

from django.db import transaction
from django.db.models import Count

from apps.core.models import PipelineStage
from apps.sales.models import SalesPerson
from .models import Lead, LeadEmail, LeadPhone, Activity

logger = logging.getLogger(__name__)


class LeadCreationError(Exception):
    """Raised when a lead cannot be stored"""


# INTAKE
def _replace_contacts(lead, emails, phones):
    lead.emails.all().delete()
    lead.phones.all().delete()

    LeadEmail.objects.bulk_create([LeadEmail(lead=lead, email=email) for email in emails])
    LeadPhone.objects.bulk_create([LeadPhone(lead=lead, phone=phone) for phone in phones])


def create_lead(created_by=None, emails=(), phones=(), keywords=(), **fields):
    """
    Store a lead with its contact rows in one transaction.

    `fields` are Lead model fields. A missing status falls back to the
    default pipeline stage.

    Raises:
        LeadCreationError: missing name/company/contact, or no pipeline stage exists
    """
    emails = list(emails)
    phones = list(phones)

    if not (fields.get('name') or '').strip():
        raise LeadCreationError('Lead name is required')
    if not (fields.get('company') or '').strip():
        raise LeadCreationError('Company is required')
    if not emails and not phones:
        raise LeadCreationError('At least one email or phone number is required')

    if not fields.get('status'):
        fields['status'] = PipelineStage.default_stage()
        if fields['status'] is None:
            raise LeadCreationError(
                'No default status available. Please select a status or contact support.'
            )

    with transaction.atomic():
        lead = Lead.objects.create(created_by=created_by, **fields)
        _replace_contacts(lead, emails, phones)
        if keywords:
            lead.keywords.set(list(keywords))

    logger.info(
        "Lead %s created (emails=%d, phones=%d)", lead.pk, len(emails), len(phones)
    )
    return lead


def update_lead(form, user=None):
    """
    Save a bound, valid LeadForm for an existing lead.

    Contacts are replaced wholesale and an 'updated' activity lists the
    changed fields.
    """
    changed_fields = [
        str(form.fields[name].label or name) for name in form.changed_data
    ]

    with transaction.atomic():
        lead = form.save()
        _replace_contacts(lead, form.cleaned_data['emails'], form.cleaned_data['phones'])

        if changed_fields:
            Activity.objects.create(
                lead=lead,
                user=user,
                activity_type='updated',
                description=f'Updated: {", ".join(changed_fields)}'
            )

    logger.info("Lead %s updated (%s)", lead.pk, ', '.join(form.changed_data) or 'no changes')
    return lead


# AUTO-ASSIGN
def least_loaded(counts, candidates):
    """
    Candidate id with the lowest count; the first minimum wins ties.

    Args:
        counts: {candidate_id: current number of leads}
        candidates: candidate ids in priority order
    """
    best = None
    for candidate in candidates:
        if best is None or counts.get(candidate, 0) < counts.get(best, 0):
            best = candidate
    return best


def auto_assign_leads(assigned_by=None):
    """
    Hand every unassigned lead to the currently least-loaded sales person.

    Candidates are the active sales persons in onboarding order; inactive
    ones never receive new leads even though their existing leads stay
    with them. Existing assignments count towards each candidate's load.
    Unassigned leads are taken oldest first and locked for the duration of
    the pass.

    Returns:
        dict: {'assigned': n, 'candidates': m,
               'per_person': {sales_person_id: {'name': ..., 'count': n}}}
    """
    candidates = list(
        SalesPerson.objects.filter(status=SalesPerson.STATUS_ACTIVE).order_by('created_at', 'id')
    )

    if not candidates:
        logger.warning("Auto-assign skipped: no active sales persons")
        return {'assigned': 0, 'candidates': 0, 'per_person': {}}

    by_id = {sp.id: sp for sp in candidates}
    candidate_ids = [sp.id for sp in candidates]
    per_person = {}

    with transaction.atomic():
        unassigned = list(
            Lead.objects.select_for_update()
            .filter(assigned_to__isnull=True)
            .order_by('created_at', 'id')
        )

        load = dict(
            Lead.objects.filter(assigned_to__in=candidate_ids)
            .order_by()
            .values_list('assigned_to')
            .annotate(count=Count('id'))
        )

        for lead in unassigned:
            chosen_id = least_loaded(load, candidate_ids)
            sales_person = by_id[chosen_id]

            lead.assign_to(sales_person, assigned_by=assigned_by)

            load[chosen_id] = load.get(chosen_id, 0) + 1
            summary = per_person.setdefault(chosen_id, {'name': sales_person.name, 'count': 0})
            summary['count'] += 1

    logger.info(
        "Auto-assigned %d lead(s) across %d sales person(s)", len(unassigned), len(candidates)
    )
    return {
        'assigned': len(unassigned),
        'candidates': len(candidates),
        'per_person': per_person,
    }
