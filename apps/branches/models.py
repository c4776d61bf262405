"""
Branches App - Physical branches (sucursales) that own stock and purchase requests
"""
from django.db import models


class BranchQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True, deleted_at__isnull=True)


class Branch(models.Model):
    """Store, warehouse or office of the company"""
    code = models.CharField(max_length=20, unique=True, verbose_name="Código", help_text="Ex: SUC-001")
    name = models.CharField(max_length=100, verbose_name="Nombre de la Sucursal")
    address = models.TextField(blank=True, verbose_name="Dirección")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = BranchQuerySet.as_manager()

    class Meta:
        verbose_name = "Sucursal"
        verbose_name_plural = "Sucursales"
        ordering = ['name']

    def __str__(self):
        return self.name


class BranchMixin(models.Model):
    """Abstract base model for branch-scoped entities"""
    branch = models.ForeignKey(Branch, on_delete=models.PROTECT, verbose_name="Sucursal")

    class Meta:
        abstract = True
