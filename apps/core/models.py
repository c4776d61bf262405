"""
Core App - Master catalogs shared by every module
"""
from django.db import models


class CatalogCategory(models.TextChoices):
    UNIT_MEASURE = 'UNIT_MEASURE', 'Unidad de Medida'
    CLIENT_TYPE = 'CLIENT_TYPE', 'Tipo de Cliente'
    DOC_TYPE = 'DOC_TYPE', 'Tipo de Documento'
    COUNTRY = 'COUNTRY', 'País'


class MasterCatalog(models.Model):
    """Generic lookup rows (units of measure, document types, countries...)"""
    category = models.CharField(max_length=30, choices=CatalogCategory.choices, db_index=True)
    code = models.CharField(max_length=20)
    description = models.CharField(max_length=150)
    num_1 = models.CharField(max_length=10, blank=True, help_text="Código SUNAT u otro valor auxiliar")
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Catálogo Maestro"
        verbose_name_plural = "Catálogos Maestros"
        unique_together = ['category', 'code']
        ordering = ['category', 'description']

    def __str__(self):
        return f"{self.category}: {self.description}"

    @classmethod
    def options(cls, category):
        """Active rows of a category ordered by description"""
        return cls.objects.filter(category=category, is_active=True).order_by('description')

    @classmethod
    def unit_measures(cls):
        return list(cls.options(CatalogCategory.UNIT_MEASURE).values('code', 'description'))
