"""
Upload paths for workflow documents.

Files live under MEDIA_ROOT in one folder per stage; the stored path is
relative (quotations/..., executions/..., receptions/...).
"""
import os
import uuid

from django.core.files.storage import default_storage
from django.db import transaction
from django.utils import timezone

QUOTATIONS_DIR = 'quotations'
EXECUTIONS_DIR = 'executions'
RECEPTIONS_DIR = 'receptions'

UPLOAD_DIRS = (QUOTATIONS_DIR, EXECUTIONS_DIR, RECEPTIONS_DIR)


def unique_name(prefix, filename):
    """PREFIX-<timestamp>-<short uuid>.<original extension>"""
    ext = os.path.splitext(filename or '')[1].lower() or '.bin'
    stamp = timezone.now().strftime('%Y%m%d%H%M%S')
    return f"{prefix}-{stamp}-{uuid.uuid4().hex[:8]}{ext}"


def quotation_upload_to(instance, filename):
    return f"{QUOTATIONS_DIR}/{unique_name(f'COT-{instance.request_id}', filename)}"


def invoice_upload_to(instance, filename):
    return f"{EXECUTIONS_DIR}/{unique_name(f'INV-{instance.request_id}', filename)}"


def voucher_upload_to(instance, filename):
    return f"{EXECUTIONS_DIR}/{unique_name(f'PAY-{instance.invoice_id}', filename)}"


def reception_upload_to(instance, filename):
    return f"{RECEPTIONS_DIR}/{unique_name(f'GUIA-{instance.request_id or 0}', filename)}"


def delete_on_commit(*names):
    """Removes stored files once the surrounding transaction commits."""
    names = [str(name) for name in names if name]
    if not names:
        return

    def _delete():
        for name in names:
            if default_storage.exists(name):
                default_storage.delete(name)

    transaction.on_commit(_delete)
