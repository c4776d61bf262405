from decouple import config
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import BaseCommand

from apps.accounts.models import Role, UserProfile
from apps.branches.models import Branch


class Command(BaseCommand):
    help = 'Inicializa catálogos, sucursal principal y superusuario'

    def handle(self, *args, **options):
        self.stdout.write('🔄 Iniciando seed_db...')

        # 1. Catálogos maestros
        call_command('seed_catalogs', stdout=self.stdout)

        # 2. Sucursal principal
        branch, created = Branch.objects.get_or_create(
            code=config('MAIN_BRANCH_CODE', default='SUC-001'),
            defaults={'name': config('MAIN_BRANCH_NAME', default='Sede Central')}
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f'✅ Sucursal "{branch.name}" creada.'))

        # 3. Superusuario (leído del .env)
        User = get_user_model()
        u = config('DJANGO_SUPERUSER_USERNAME', default='admin')
        e = config('DJANGO_SUPERUSER_EMAIL', default='admin@example.com')
        p = config('DJANGO_SUPERUSER_PASSWORD', default='admin123')

        if not User.objects.filter(username=u).exists():
            user = User.objects.create_superuser(u, e, p)
            UserProfile.objects.create(user=user, role=Role.CEO, branch=branch)
            self.stdout.write(self.style.SUCCESS(f'✅ Superusuario "{u}" creado con éxito.'))
        else:
            self.stdout.write(self.style.WARNING(f'ℹ️ Superusuario "{u}" ya existe.'))
