# core/api.py
# Seed endpoints for bootstrapping a fresh deployment.
# Both are unauthenticated POSTs and answer with JSON.

import logging

from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .seeding import ensure_default_packages, seed_database

logger = logging.getLogger(__name__)


def _admin_payload(user):
    return {
        'id': user.id,
        'email': user.email,
        'role': user.role,
    }


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def ensure_packages(request):
    """
    Insert the default packages when the catalogue is empty.

    200 {"message": "Packages ensured successfully", "packagesCreated": n}
    200 {"message": "Packages already exist", "packagesExist": true}
    500 {"error": "..."}
    """
    try:
        created = ensure_default_packages()
    except Exception as e:
        logger.exception("Ensure packages failed")
        return Response(
            {'error': str(e) or 'Failed to ensure packages'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if created:
        return Response({
            'message': 'Packages ensured successfully',
            'packagesCreated': created,
        })

    return Response({
        'message': 'Packages already exist',
        'packagesExist': True,
    })


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def seed(request):
    """
    Create the default admin, pipeline stages and packages.

    200 {"message": "Database seeded successfully", "admin": {...}}
    200 {"message": "Admin user already exists", "admin": {...}}
    500 {"error": "..."}
    """
    try:
        summary = seed_database()
    except Exception as e:
        logger.exception("Seed failed")
        return Response(
            {'error': str(e) or 'Failed to seed database'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    admin = _admin_payload(summary['admin'])

    if not summary['admin_created']:
        return Response({
            'message': 'Admin user already exists',
            'admin': admin,
        })

    return Response({
        'message': 'Database seeded successfully',
        'admin': admin,
    })

