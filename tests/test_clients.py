import pytest

from apps.clients.models import Client, ClientType, DocumentType
from apps.clients.services import ClientService
from tests.factories import ClientFactory


def natural(**overrides):
    data = {
        'client_type': ClientType.NATURAL,
        'doc_type': DocumentType.DNI,
        'doc_number': '45678912',
        'first_name': 'María',
        'paternal_surname': 'Quispe',
        'maternal_surname': 'Mamani',
        'email': 'maria@example.com',
    }
    data.update(overrides)
    return data


def legal(**overrides):
    data = {
        'client_type': ClientType.LEGAL,
        'doc_type': DocumentType.RUC,
        'doc_number': '20601234567',
        'business_name': 'Comercial Andina SAC',
        'trade_name': 'Andina',
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestCreateClient:
    def test_natural_person(self, requester):
        result = ClientService.create_client(requester, natural())

        assert result.success
        assert result.message == "Cliente registrado correctamente"
        client = Client.objects.get(pk=result.data['client_id'])
        assert client.display_name == "María Quispe Mamani"
        assert client.created_by == requester
        assert client.country == 'PERÚ'

    def test_legal_person(self, requester):
        result = ClientService.create_client(requester, legal())
        assert result.success
        assert Client.objects.get().business_name == 'Comercial Andina SAC'

    def test_natural_requires_names(self, requester):
        result = ClientService.create_client(requester, natural(paternal_surname=''))
        assert not result.success
        assert "Nombres y apellido paterno son obligatorios." in result.message

    def test_legal_requires_ruc(self, requester):
        result = ClientService.create_client(requester, legal(doc_type=DocumentType.DNI, doc_number='12345678'))
        assert not result.success
        assert "RUC" in result.message

    def test_legal_requires_business_name(self, requester):
        result = ClientService.create_client(requester, legal(business_name='  '))
        assert "La razón social es obligatoria." in result.message

    @pytest.mark.parametrize('doc_number', ['1234567', '123456789', 'ABCDEFGH'])
    def test_dni_must_have_eight_digits(self, requester, doc_number):
        result = ClientService.create_client(requester, natural(doc_number=doc_number))
        assert not result.success
        assert "El DNI debe tener 8 dígitos." in result.message

    def test_passport_is_upper_cased(self, requester):
        result = ClientService.create_client(requester, natural(doc_type=DocumentType.PASSPORT, doc_number='ab12345'))
        assert result.success
        assert Client.objects.get().doc_number == 'AB12345'

    def test_duplicate_document(self, requester):
        ClientFactory(doc_number='45678912')
        result = ClientService.create_client(requester, natural())
        assert not result.success
        assert result.message == "El número de documento ya existe."

    def test_document_reusable_after_delete(self, requester):
        existing = ClientFactory(doc_number='45678912')
        assert ClientService.delete_client(requester, existing.pk).success

        assert ClientService.create_client(requester, natural()).success
        assert Client.objects.filter(doc_number='45678912').count() == 2


@pytest.mark.django_db
class TestUpdateClient:
    def test_updates_names_and_contact(self, requester):
        client = ClientFactory()
        result = ClientService.update_client(requester, client.pk, {
            'first_name': 'ROSA', 'phone': '999888777', 'doc_number': '11111111', 'client_type': ClientType.LEGAL,
        })

        assert result.success
        client.refresh_from_db()
        assert client.first_name == 'ROSA'
        assert client.phone == '999888777'
        assert client.doc_number != '11111111'
        assert client.client_type == ClientType.NATURAL
        assert client.updated_by == requester

    def test_deleted_client_not_found(self, requester):
        client = ClientFactory()
        ClientService.delete_client(requester, client.pk)
        result = ClientService.update_client(requester, client.pk, {'first_name': 'X'})
        assert result.message == "Cliente no encontrado."


@pytest.mark.django_db
class TestDeleteClient:
    def test_soft_delete(self, requester):
        client = ClientFactory()
        result = ClientService.delete_client(requester, client.pk)

        assert result.message == "Cliente eliminado correctamente"
        client.refresh_from_db()
        assert client.deleted_at is not None
        assert client.deleted_by == requester
        assert not ClientService.list_clients().exists()

    def test_list_search(self):
        ClientFactory(first_name='ANA', doc_number='10000001')
        ClientFactory(client_type=ClientType.LEGAL, doc_type=DocumentType.RUC,
                      doc_number='20100000001', business_name='FERRETERIA SUR')

        assert ClientService.list_clients('ferre').get().business_name == 'FERRETERIA SUR'
        assert ClientService.list_clients('10000001').count() == 1
        assert ClientService.list_clients().count() == 2
