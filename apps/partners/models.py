"""
Partners App - Providers (proveedores)

Providers are identified by their RUC. Execution registration finds or creates
them from the invoice data, so the same RUC always maps to one provider.
"""
from __future__ import annotations

import re

from django.core.exceptions import ValidationError
from django.db import models

RUC_PREFIXES = ('10', '15', '16', '17', '20')


def clean_ruc(value: str) -> str:
    """Strips spaces and separators from a RUC."""
    return re.sub(r'[^0-9]', '', value or '')


def validate_ruc(value: str) -> None:
    """
    Valida RUC peruano (11 dígitos con prefijo de contribuyente).

    Raises:
        ValidationError: Si el RUC es inválido
    """
    ruc = clean_ruc(value)

    if len(ruc) != 11:
        raise ValidationError('El RUC debe tener 11 dígitos')

    if not ruc.startswith(RUC_PREFIXES):
        raise ValidationError('RUC inválido (prefijo no reconocido)')


class Provider(models.Model):
    """
    Proveedor de compras.

    Attributes:
        ruc: RUC del proveedor (único en el sistema)
        name: Razón social
        address: Dirección o sucursal del proveedor

    Example:
        >>> provider, created = Provider.get_or_create_by_ruc(
        ...     '20123456789', 'ACME SAC', address='Av. Lima 123'
        ... )
    """

    ruc = models.CharField(
        max_length=11,
        unique=True,
        validators=[validate_ruc],
        verbose_name='RUC'
    )
    name = models.CharField(max_length=200, verbose_name='Razón Social')
    address = models.CharField(max_length=255, blank=True, verbose_name='Dirección / Sucursal')
    is_active = models.BooleanField(default=True, verbose_name='Activo')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Proveedor'
        verbose_name_plural = 'Proveedores'
        ordering = ['name']

    def __str__(self) -> str:
        return f'{self.name} ({self.ruc})'

    def clean(self) -> None:
        super().clean()
        if self.ruc:
            self.ruc = clean_ruc(self.ruc)
        if self.name:
            self.name = self.name.strip()

    def save(self, *args, **kwargs) -> None:
        self.full_clean()
        super().save(*args, **kwargs)

    @classmethod
    def get_or_create_by_ruc(cls, ruc: str, name: str, address: str = '') -> tuple['Provider', bool]:
        """
        Obtiene o crea el proveedor por RUC.

        An existing provider keeps its stored name and address.

        Returns:
            Tuple (provider, created)
        """
        ruc_clean = clean_ruc(ruc)
        provider = cls.objects.filter(ruc=ruc_clean).first()
        if provider:
            return provider, False

        provider = cls(ruc=ruc_clean, name=name.strip()[:200], address=(address or '').strip()[:255])
        provider.save()
        return provider, True
