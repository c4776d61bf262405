"""
Products App - Product catalog
"""
from django.conf import settings
from django.db import models


class Product(models.Model):
    """
    Catalog product. Stock lives per branch in inventory.ProductStock.
    The code is generated from the primary key right after the first insert.
    """
    CODE_PREFIX = 'PROD'

    code = models.CharField(max_length=20, unique=True, null=True, blank=True, verbose_name="Código")
    name = models.CharField(max_length=255, verbose_name="Nombre del Producto")
    description = models.TextField(blank=True, verbose_name="Descripción")
    unit_measure = models.CharField(max_length=10, default='NIU', verbose_name="Unidad de Medida")
    is_active = models.BooleanField(default=True, verbose_name="Activo")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_products'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Producto"
        verbose_name_plural = "Productos"
        ordering = ['name']

    def __str__(self):
        return f"{self.code} - {self.name}" if self.code else self.name

    @classmethod
    def build_code(cls, pk):
        return f"{cls.CODE_PREFIX}-{pk:06d}"

    def save(self, *args, **kwargs):
        if self.name:
            self.name = self.name.strip().upper()

        is_new = self._state.adding
        super().save(*args, **kwargs)

        if is_new and not self.code:
            self.code = self.build_code(self.pk)
            Product.objects.filter(pk=self.pk).update(code=self.code)
