"""
Payment status report for all students.
Usage: python manage.py payment_status_report [--date YYYY-MM-DD] [--status overdue]
Read-only: prints resolved status, next due window and outstanding amounts.
"""
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.services import get_fee_calculation_mode
from core.utils import format_currency, parse_iso_date
from payments.services.cycle import format_payment_cycle
from payments.services.status import payment_standing, resolve_status
from students.models import Student


class Command(BaseCommand):
    help = 'Report payment status and outstanding amounts per student (no changes are made)'

    def add_arguments(self, parser):
        parser.add_argument('--date', help='Evaluate as of this day (default: today)')
        parser.add_argument('--status', help='Only show students with this resolved status')
        parser.add_argument(
            '--include-inactive',
            action='store_true',
            help='Include inactive and suspended students',
        )

    def handle(self, *args, **options):
        today = timezone.localdate()
        if options.get('date'):
            today = parse_iso_date(options['date'])
            if today is None:
                raise CommandError('--date must be YYYY-MM-DD')
        mode = get_fee_calculation_mode()

        students = Student.objects.select_related('class_offering').prefetch_related('payments')
        if not options['include_inactive']:
            students = students.filter(status=Student.STATUS_ACTIVE)

        self.stdout.write(f'Payment status as of {today} (fee mode {mode})')
        totals = {'students': 0, 'unpaid': 0, 'overdue': 0}
        for student in students:
            payments = list(student.payments.all())
            result = resolve_status(student, payments, today)
            if options.get('status') and result.status != options['status']:
                continue
            standing = payment_standing(student, student.class_offering, payments, today, mode)
            totals['students'] += 1
            totals['unpaid'] += standing.unpaid_amount
            totals['overdue'] += standing.overdue_amount

            line = (
                f'  {student.code:<12} {student.name:<30} '
                f'{format_payment_cycle(student.effective_payment_cycle):<10} {result.status:<15}'
            )
            if result.next_due_from:
                line += f' next due {result.next_due_from}..{result.next_due_to}'
            if standing.unpaid_amount:
                line += f' unpaid {format_currency(standing.unpaid_amount)}'
            style = self.style.ERROR if result.status == 'overdue' else (lambda s: s)
            self.stdout.write(style(line))

        self.stdout.write(self.style.SUCCESS(
            f"Done. students={totals['students']}, unpaid={format_currency(totals['unpaid'])}, "
            f"overdue={format_currency(totals['overdue'])}"
        ))
