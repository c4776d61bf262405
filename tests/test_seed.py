import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from apps.accounts.models import Role
from apps.branches.models import Branch
from apps.core.models import CatalogCategory, MasterCatalog
from apps.products.forms import ProductForm


@pytest.mark.django_db
class TestSeedCommands:
    def test_seed_catalogs_is_idempotent(self):
        call_command('seed_catalogs')
        first = MasterCatalog.objects.count()
        call_command('seed_catalogs')

        assert MasterCatalog.objects.count() == first
        assert MasterCatalog.options(CatalogCategory.COUNTRY).get().description == 'PERÚ'

    def test_seed_db_creates_branch_and_superuser(self):
        call_command('seed_db')
        call_command('seed_db')

        admin = get_user_model().objects.get(username='admin')
        assert admin.is_superuser
        assert admin.profile.role == Role.CEO
        assert Branch.objects.get().code == 'SUC-001'

    def test_unit_measures_feed_product_form(self):
        call_command('seed_catalogs')
        choices = dict(ProductForm().fields['unit_measure'].choices)
        assert choices['KGM'] == 'KILOGRAMO'
