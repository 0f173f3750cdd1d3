from django.core.management.base import BaseCommand, CommandError

from listings.models import Property
from listings.reformatting import reformat_property_description
from listings.tasks import dispatch_reformat_job


class Command(BaseCommand):
    help = 'Reformat and translate a property description with the AI service'

    def add_arguments(self, parser):
        parser.add_argument('property_id', type=int, help='Property id')
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Run in this process instead of queueing a job',
        )

    def handle(self, *args, **options):
        property_id = options['property_id']

        if not Property.objects.filter(pk=property_id).exists():
            raise CommandError(f"Property with ID {property_id} not found.")

        if options['sync']:
            self.stdout.write(f"Reformatting description for property {property_id}...")
            try:
                property_obj = reformat_property_description(property_id)
            except Exception as exc:
                raise CommandError(f"Reformatting failed: {exc}") from exc
            self.stdout.write(self.style.SUCCESS(f"Done. New slug: {property_obj.slug}"))
            return

        result = dispatch_reformat_job(property_id)
        self.stdout.write(self.style.SUCCESS(f"Queued reformat job {result.id} for property {property_id}."))
