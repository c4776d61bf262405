from django.core.management.base import BaseCommand

from apps.core.models import CatalogCategory, MasterCatalog

DEFAULT_CATALOGS = {
    CatalogCategory.UNIT_MEASURE: [
        ('NIU', 'UNIDAD', 'NIU'),
        ('KGM', 'KILOGRAMO', 'KGM'),
        ('LTR', 'LITRO', 'LTR'),
        ('MTR', 'METRO', 'MTR'),
        ('BX', 'CAJA', 'BX'),
        ('PK', 'PAQUETE', 'PK'),
    ],
    CatalogCategory.CLIENT_TYPE: [
        ('NAT', 'PERSONA NATURAL', ''),
        ('JUR', 'PERSONA JURÍDICA', ''),
    ],
    CatalogCategory.DOC_TYPE: [
        ('DNI', 'DOCUMENTO NACIONAL DE IDENTIDAD', '1'),
        ('RUC', 'REGISTRO ÚNICO DE CONTRIBUYENTES', '6'),
        ('CE', 'CARNET DE EXTRANJERÍA', '4'),
        ('PAS', 'PASAPORTE', '7'),
    ],
    CatalogCategory.COUNTRY: [
        ('PE', 'PERÚ', ''),
    ],
}


class Command(BaseCommand):
    help = 'Carga los catálogos maestros por defecto (idempotente)'

    def handle(self, *args, **options):
        created = 0
        for category, rows in DEFAULT_CATALOGS.items():
            for code, description, num_1 in rows:
                _, was_created = MasterCatalog.objects.get_or_create(
                    category=category,
                    code=code,
                    defaults={'description': description, 'num_1': num_1}
                )
                created += was_created

        self.stdout.write(self.style.SUCCESS(f'✅ Catálogos listos ({created} nuevos).'))
