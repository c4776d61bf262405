from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import transaction
from rest_framework.test import APIClient

from apps.accounts.models import Role
from apps.inventory.models import MovementConcept, MovementType
from apps.inventory.services import StockService
from tests.factories import BranchFactory, ProductFactory, UserProfileFactory


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / 'uploads'
    return settings.MEDIA_ROOT


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def branch():
    return BranchFactory(name="Sucursal Central")


@pytest.fixture
def make_user(branch):
    """make_user(Role.X) -> user with an active profile in `branch`"""
    def _make(role, user_branch=None, **kwargs):
        return UserProfileFactory(role=role, branch=user_branch or branch, **kwargs).user
    return _make


@pytest.fixture
def ceo(make_user):
    return make_user(Role.CEO)


@pytest.fixture
def logistics(make_user):
    return make_user(Role.LOGISTICS)


@pytest.fixture
def accountant(make_user):
    return make_user(Role.ACCOUNTANT)


@pytest.fixture
def branch_admin(make_user):
    return make_user(Role.BRANCH_ADMIN)


@pytest.fixture
def warehouse(make_user):
    return make_user(Role.WAREHOUSE)


@pytest.fixture
def requester(make_user):
    return make_user(Role.REQUESTER)


@pytest.fixture
def product():
    return ProductFactory(name="Papel Bond A4", unit_measure='PK')


@pytest.fixture
def add_stock(logistics):
    """add_stock(branch, product, quantity) -> movement (INGRESO/AJUSTE)"""
    def _add(target_branch, target_product, quantity):
        with transaction.atomic():
            return StockService.apply_movement(
                user=logistics,
                branch=target_branch,
                product=target_product,
                movement_type=MovementType.IN,
                concept=MovementConcept.ADJUSTMENT,
                quantity=Decimal(str(quantity)),
                reason="Stock inicial",
            )
    return _add


@pytest.fixture
def pdf_file():
    def _file(name='documento.pdf'):
        return SimpleUploadedFile(name, b'%PDF-1.4 test', content_type='application/pdf')
    return _file
