"""
Client registry service.
"""
import logging

from django.db.models import Q
from django.utils import timezone

from apps.accounts.permissions import Capability
from apps.core.exceptions import BusinessRuleError
from apps.core.services import ActionResult, parse_id, service_action

from .models import Client, ClientType

logger = logging.getLogger(__name__)

DUPLICATE_DOCUMENT_MESSAGE = "El número de documento ya existe."

CONTACT_FIELDS = ['email', 'phone', 'address', 'country', 'department', 'province', 'district', 'zip_code']
NATURAL_FIELDS = ['first_name', 'paternal_surname', 'maternal_surname']
LEGAL_FIELDS = ['business_name', 'trade_name']


def _editable_fields(client_type):
    names = NATURAL_FIELDS if client_type == ClientType.NATURAL else LEGAL_FIELDS
    return names + CONTACT_FIELDS


def _assign(client, data):
    for name in _editable_fields(client.client_type):
        if name in data:
            value = data[name]
            setattr(client, name, value.strip() if isinstance(value, str) else (value or ''))


def _get_alive(client_id):
    client = Client.objects.alive().select_for_update().filter(pk=parse_id(client_id)).first()
    if client is None:
        raise BusinessRuleError('NOT_FOUND', "Cliente no encontrado.")
    return client


class ClientService:

    @staticmethod
    @service_action(Capability.MANAGE_CLIENTS)
    def create_client(user, data):
        """
        Registers a client. `data` holds client_type, doc_type, doc_number and
        the name/contact fields of that client type.
        """
        client = Client(
            client_type=data.get('client_type', ''),
            doc_type=data.get('doc_type', ''),
            doc_number=(data.get('doc_number') or '').strip().upper(),
            created_by=user,
            updated_by=user,
        )
        _assign(client, data)

        if Client.objects.alive().filter(doc_number=client.doc_number).exists():
            raise BusinessRuleError('DUPLICATE', DUPLICATE_DOCUMENT_MESSAGE)

        client.full_clean()
        client.save()

        logger.info(f"Cliente {client.doc_number} registrado por {user.username}")
        return ActionResult.ok("Cliente registrado correctamente", client_id=client.pk)

    @staticmethod
    @service_action(Capability.MANAGE_CLIENTS)
    def update_client(user, client_id, data):
        """Updates names and contact data; type and document stay as registered"""
        client = _get_alive(client_id)
        _assign(client, data)
        client.updated_by = user
        client.full_clean()
        client.save()

        logger.info(f"Cliente {client.doc_number} actualizado por {user.username}")
        return ActionResult.ok("Cliente actualizado correctamente")

    @staticmethod
    @service_action(Capability.MANAGE_CLIENTS)
    def delete_client(user, client_id):
        client = _get_alive(client_id)
        client.deleted_at = timezone.now()
        client.deleted_by = user
        client.save(update_fields=['deleted_at', 'deleted_by', 'updated_at'])

        logger.info(f"Cliente {client.doc_number} eliminado por {user.username}")
        return ActionResult.ok("Cliente eliminado correctamente")

    @staticmethod
    def list_clients(query=''):
        clients = Client.objects.alive()
        query = (query or '').strip()
        if query:
            clients = clients.filter(
                Q(doc_number__icontains=query) |
                Q(business_name__icontains=query) |
                Q(trade_name__icontains=query) |
                Q(first_name__icontains=query) |
                Q(paternal_surname__icontains=query)
            )
        return clients
