from django.core.management.base import BaseCommand

from apps.purchases.tasks import cleanup_orphan_uploads, find_orphan_uploads


class Command(BaseCommand):
    help = 'Elimina archivos subidos que ya no están referenciados por ningún documento'

    def add_arguments(self, parser):
        parser.add_argument('--grace-hours', type=int, default=None, help='Antigüedad mínima del archivo')
        parser.add_argument('--dry-run', action='store_true', help='Solo listar, sin borrar')

    def handle(self, *args, **options):
        grace_hours = options['grace_hours']

        if options['dry_run']:
            for name in find_orphan_uploads(grace_hours):
                self.stdout.write(f'  {name}')

        result = cleanup_orphan_uploads(grace_hours=grace_hours, dry_run=options['dry_run'])
        self.stdout.write(self.style.SUCCESS(f'✅ {result}'))
