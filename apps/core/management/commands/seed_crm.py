from django.core.management.base import BaseCommand, CommandError

from apps.core.seeding import seed_database


class Command(BaseCommand):
    help = 'Create the default admin user, pipeline stages and packages'

    def handle(self, *args, **options):
        try:
            summary = seed_database()
        except Exception as e:
            raise CommandError(f'Seeding failed: {e}') from e

        admin = summary['admin']
        if summary['admin_created']:
            self.stdout.write(self.style.SUCCESS(f'Created admin user {admin.email}'))
        else:
            self.stdout.write(f'Admin user {admin.email} already exists')

        self.stdout.write(f"Pipeline stages created: {summary['stages_created']}")
        self.stdout.write(f"Packages created: {summary['packages_created']}")
        self.stdout.write(self.style.SUCCESS('Database seeded successfully'))
