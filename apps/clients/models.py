"""
Clients App - Customer registry (natural persons and legal entities)
"""
import re

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class ClientType(models.TextChoices):
    NATURAL = 'NAT', 'Persona Natural'
    LEGAL = 'JUR', 'Persona Jurídica'


class DocumentType(models.TextChoices):
    DNI = 'DNI', 'DNI'
    RUC = 'RUC', 'RUC'
    CE = 'CE', 'Carnet de Extranjería'
    PASSPORT = 'PAS', 'Pasaporte'


DOCUMENT_PATTERNS = {
    DocumentType.DNI: (re.compile(r'^\d{8}$'), "El DNI debe tener 8 dígitos."),
    DocumentType.RUC: (re.compile(r'^\d{11}$'), "El RUC debe tener 11 dígitos."),
    DocumentType.CE: (re.compile(r'^[A-Z0-9]{1,12}$'), "El CE admite hasta 12 caracteres alfanuméricos."),
    DocumentType.PASSPORT: (re.compile(r'^[A-Z0-9]{1,12}$'), "El pasaporte admite hasta 12 caracteres alfanuméricos."),
}

# Document number uniqueness only applies to clients that are not deleted
UNIQUE_DOCUMENT_CONSTRAINT = 'unique_active_client_document'


def validate_document(doc_type, doc_number):
    pattern = DOCUMENT_PATTERNS.get(doc_type)
    if pattern is None:
        raise ValidationError({'doc_type': "Tipo de documento inválido."})
    regex, message = pattern
    if not regex.match(doc_number or ''):
        raise ValidationError({'doc_number': message})


class ClientQuerySet(models.QuerySet):
    def alive(self):
        return self.filter(deleted_at__isnull=True)


class Client(models.Model):
    client_type = models.CharField(max_length=3, choices=ClientType.choices, verbose_name="Tipo de Cliente")
    doc_type = models.CharField(max_length=3, choices=DocumentType.choices, verbose_name="Tipo de Documento")
    doc_number = models.CharField(max_length=12, verbose_name="N° Documento")

    # Persona natural
    first_name = models.CharField(max_length=100, blank=True, verbose_name="Nombres")
    paternal_surname = models.CharField(max_length=100, blank=True, verbose_name="Apellido Paterno")
    maternal_surname = models.CharField(max_length=100, blank=True, verbose_name="Apellido Materno")

    # Persona jurídica
    business_name = models.CharField(max_length=200, blank=True, verbose_name="Razón Social")
    trade_name = models.CharField(max_length=200, blank=True, verbose_name="Nombre Comercial")

    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True, verbose_name="Teléfono")
    address = models.CharField(max_length=255, blank=True, verbose_name="Dirección")
    country = models.CharField(max_length=100, blank=True, default='PERÚ', verbose_name="País")
    department = models.CharField(max_length=100, blank=True, verbose_name="Departamento")
    province = models.CharField(max_length=100, blank=True, verbose_name="Provincia")
    district = models.CharField(max_length=100, blank=True, verbose_name="Distrito")
    zip_code = models.CharField(max_length=10, blank=True, verbose_name="Código Postal")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    deleted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = ClientQuerySet.as_manager()

    class Meta:
        verbose_name = "Cliente"
        verbose_name_plural = "Clientes"
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(
                fields=['doc_number'],
                condition=Q(deleted_at__isnull=True),
                name=UNIQUE_DOCUMENT_CONSTRAINT
            ),
        ]

    def __str__(self):
        return f"{self.doc_number} - {self.display_name}"

    @property
    def display_name(self):
        if self.client_type == ClientType.LEGAL:
            return self.business_name
        return " ".join(part for part in [self.first_name, self.paternal_surname, self.maternal_surname] if part)

    def clean(self):
        self.doc_number = (self.doc_number or '').strip().upper()
        validate_document(self.doc_type, self.doc_number)

        if self.client_type == ClientType.NATURAL:
            if not self.first_name.strip() or not self.paternal_surname.strip():
                raise ValidationError("Nombres y apellido paterno son obligatorios.")
        elif self.client_type == ClientType.LEGAL:
            if self.doc_type != DocumentType.RUC:
                raise ValidationError({'doc_type': "Una persona jurídica se registra con RUC."})
            if not self.business_name.strip():
                raise ValidationError({'business_name': "La razón social es obligatoria."})
        else:
            raise ValidationError({'client_type': "Tipo de cliente inválido."})
