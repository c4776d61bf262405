import factory
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.accounts.models import Role, UserProfile
from apps.branches.models import Branch
from apps.clients.models import Client, ClientType, DocumentType
from apps.partners.models import Provider
from apps.products.models import Product
from apps.purchases.models import (
    PurchaseInvoice,
    PurchasePayment,
    PurchaseQuotation,
    PurchaseRequest,
)

User = get_user_model()


class BranchFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Branch

    code = factory.Sequence(lambda n: f'SUC-{n:03d}')
    name = factory.Sequence(lambda n: f'Sucursal {n}')
    is_active = True


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f'user_{n}')
    email = factory.LazyAttribute(lambda o: f'{o.username}@example.com')

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        password = extracted or "password123"
        self.set_password(password)
        if create:
            self.save()


class UserProfileFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = UserProfile

    user = factory.SubFactory(UserFactory)
    role = Role.REQUESTER
    branch = factory.SubFactory(BranchFactory)
    is_active = True


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f'Producto {n}')
    unit_measure = 'NIU'
    code = None  # Generated on save


class ProviderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Provider

    ruc = factory.Sequence(lambda n: f'20{n:09d}')
    name = factory.Sequence(lambda n: f'PROVEEDOR {n} SAC')


class PurchaseRequestFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PurchaseRequest

    branch = factory.SubFactory(BranchFactory)
    requester = factory.SubFactory(UserFactory)
    description = "Compra de insumos"
    estimated_total = 500
    currency = 'PEN'
    issue_date = factory.LazyFunction(timezone.localdate)


class PurchaseQuotationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PurchaseQuotation

    request = factory.SubFactory(PurchaseRequestFactory)
    file = factory.django.FileField(filename='cotizacion.pdf', data=b'%PDF-1.4 quote')
    file_name = 'cotizacion.pdf'


class PurchaseInvoiceFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PurchaseInvoice

    request = factory.SubFactory(PurchaseRequestFactory)
    provider = factory.SubFactory(ProviderFactory)
    invoice_number = factory.Sequence(lambda n: f'F001-{n}')
    file = factory.django.FileField(filename='factura.pdf', data=b'%PDF-1.4 invoice')


class PurchasePaymentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PurchasePayment

    invoice = factory.SubFactory(PurchaseInvoiceFactory)
    voucher_number = factory.Sequence(lambda n: f'OP-{n}')
    file = factory.django.FileField(filename='voucher.pdf', data=b'%PDF-1.4 voucher')


class ClientFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Client

    client_type = ClientType.NATURAL
    doc_type = DocumentType.DNI
    doc_number = factory.Sequence(lambda n: f'{n:08d}')
    first_name = 'JUAN'
    paternal_surname = 'PEREZ'
