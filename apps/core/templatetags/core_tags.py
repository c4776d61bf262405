import os

from django import template

register = template.Library()

STATUS_BADGES = {
    'PENDIENTE': 'badge-warning',
    'APROBADO': 'badge-info',
    'RECHAZADO': 'badge-danger',
    'COMPRA REALIZADA': 'badge-primary',
    'COMPLETADO': 'badge-primary',
    'VALIDADA': 'badge-success',
    'VALIDADO': 'badge-success',
    'CRITICAL': 'badge-danger',
    'WARNING': 'badge-warning',
    'OK': 'badge-success',
}


@register.filter
def basename(value):
    return os.path.basename(str(value))


@register.filter
def status_badge(value):
    """CSS class for a workflow, document or stock status"""
    return STATUS_BADGES.get(str(value), 'badge-secondary')


@register.filter
def has_capability(capabilities, name):
    """{% if capabilities|has_capability:'APPROVE_REQUEST' %}"""
    return name in (capabilities or ())
