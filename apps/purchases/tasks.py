import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone

from apps.core.uploads import UPLOAD_DIRS
from apps.inventory.models import InventoryMovement

from .models import PurchaseInvoice, PurchasePayment, PurchaseQuotation

logger = logging.getLogger(__name__)


def referenced_uploads():
    """Every stored path still referenced by a document row"""
    names = set()
    names.update(PurchaseQuotation.objects.values_list('file', flat=True))
    names.update(PurchaseInvoice.objects.values_list('file', flat=True))
    names.update(PurchasePayment.objects.values_list('file', flat=True))
    names.update(InventoryMovement.objects.exclude(document_file='').values_list('document_file', flat=True))
    names.discard('')
    names.discard(None)
    return names


def find_orphan_uploads(grace_hours=None):
    """
    Upload files no row points to and older than the grace period
    (files of a transaction still in flight are younger).
    """
    if grace_hours is None:
        grace_hours = settings.UPLOAD_ORPHAN_GRACE_HOURS
    cutoff = timezone.now() - timedelta(hours=grace_hours)
    referenced = referenced_uploads()

    orphans = []
    for folder in UPLOAD_DIRS:
        if not default_storage.exists(folder):
            continue
        _, files = default_storage.listdir(folder)
        for filename in files:
            name = f"{folder}/{filename}"
            if name in referenced:
                continue
            if default_storage.get_modified_time(name) <= cutoff:
                orphans.append(name)
    return orphans


@shared_task
def cleanup_orphan_uploads(grace_hours=None, dry_run=False):
    """
    Task diaria: elimina archivos subidos que quedaron sin registro
    (por ejemplo, cuando la transacción que los guardó hizo rollback).
    """
    orphans = find_orphan_uploads(grace_hours)
    if not dry_run:
        for name in orphans:
            default_storage.delete(name)

    if orphans:
        logger.info(f"CELERY BEAT: {len(orphans)} archivos huérfanos {'detectados' if dry_run else 'eliminados'}.")
    return f"Orphans: {len(orphans)}"
