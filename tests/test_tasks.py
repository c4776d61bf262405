import pytest
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.core.management import call_command

from apps.purchases.tasks import cleanup_orphan_uploads, find_orphan_uploads
from tests.factories import PurchaseQuotationFactory


@pytest.fixture
def orphan():
    return default_storage.save('quotations/huerfano.pdf', ContentFile(b'%PDF-1.4 orphan'))


@pytest.mark.django_db
class TestOrphanUploads:
    def test_only_unreferenced_files(self, orphan):
        quotation = PurchaseQuotationFactory()

        found = find_orphan_uploads(grace_hours=0)

        assert found == [orphan]
        assert quotation.file.name not in found

    def test_grace_period_protects_recent_files(self, orphan):
        assert find_orphan_uploads(grace_hours=1) == []

    def test_dry_run_keeps_files(self, orphan):
        assert cleanup_orphan_uploads(grace_hours=0, dry_run=True) == "Orphans: 1"
        assert default_storage.exists(orphan)

    def test_cleanup_deletes(self, orphan):
        assert cleanup_orphan_uploads(grace_hours=0) == "Orphans: 1"
        assert not default_storage.exists(orphan)

    def test_missing_folders(self):
        assert find_orphan_uploads(grace_hours=0) == []

    def test_management_command(self, orphan, capsys):
        call_command('cleanup_uploads', '--grace-hours', '0', '--dry-run')

        out = capsys.readouterr().out
        assert orphan in out
        assert default_storage.exists(orphan)
