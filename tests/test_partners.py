import pytest
from django.core.exceptions import ValidationError

from apps.partners.models import Provider, clean_ruc, validate_ruc
from tests.factories import ProviderFactory


class TestRucValidation:
    @pytest.mark.parametrize('ruc', ['20123456789', '10456789123', '20 123 456 789'])
    def test_valid(self, ruc):
        validate_ruc(ruc)

    @pytest.mark.parametrize('ruc', ['2012345678', '201234567890', '99123456789', ''])
    def test_invalid(self, ruc):
        with pytest.raises(ValidationError):
            validate_ruc(ruc)

    def test_clean_ruc(self):
        assert clean_ruc('20-123456789') == '20123456789'


@pytest.mark.django_db
class TestProviderLookup:
    def test_creates_once_per_ruc(self):
        provider, created = Provider.get_or_create_by_ruc('20123456789', ' ACME SAC ', address='Av. Lima 1')
        again, created_again = Provider.get_or_create_by_ruc('20123456789', 'OTRO NOMBRE')

        assert created and not created_again
        assert again == provider
        assert again.name == 'ACME SAC'
        assert Provider.objects.count() == 1

    def test_invalid_ruc_is_not_saved(self):
        with pytest.raises(ValidationError):
            Provider.get_or_create_by_ruc('123', 'ACME')
        assert not Provider.objects.exists()

    def test_search_api(self, client, logistics):
        ProviderFactory(ruc='20555555555', name='FERRETERIA NORTE')
        ProviderFactory(ruc='20666666666', name='LIBRERIA CENTRAL')
        client.force_login(logistics)

        response = client.get('/partners/api/providers/search/', {'q': '20555'})

        assert response.status_code == 200
        assert [r['name'] for r in response.json()['results']] == ['FERRETERIA NORTE']
