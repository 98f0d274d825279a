# =============================================================================
# reports/models.py - shift reports
# =============================================================================

"""
Shift reports

Operators file one report per account per shift (AM/PM) per day. The latest
report of an account is its current state: balances, ranking page, rating.
"""
from decimal import Decimal

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.accounts.models import Account
from apps.core.models import TimeStampedModel
from apps.users.models import display_name
from .schemas import parse_accounts_created, parse_orders_in_progress


class ShiftReportQuerySet(models.QuerySet):
    """ShiftReport helpers"""

    def since(self, start_date):
        return self.filter(report_date__gte=start_date)

    def on(self, day):
        return self.filter(report_date=day)

    def between(self, start_date, end_date):
        return self.filter(report_date__gte=start_date, report_date__lte=end_date)

    def with_relations(self):
        return self.select_related('account', 'reported_by', 'handed_over_to')


class ShiftReport(TimeStampedModel):
    """One shift's snapshot of an account"""

    SHIFT_CHOICES = [
        ('AM', 'AM'),
        ('PM', 'PM'),
    ]

    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='shift_reports')
    reported_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, related_name='shift_reports'
    )
    handed_over_to = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='handovers'
    )

    report_date = models.DateField(db_index=True)
    shift = models.CharField(max_length=2, choices=SHIFT_CHOICES)

    orders_completed = models.PositiveIntegerField(default=0)
    pending_orders = models.PositiveIntegerField(default=0)
    available_balance = models.DecimalField(
        max_digits=15, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    pending_balance = models.DecimalField(
        max_digits=15, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    orders_in_progress_value = models.DecimalField(
        max_digits=15, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    ranking_page = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    success_rate = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    response_rate = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    earnings_to_date = models.DecimalField(
        max_digits=15, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    rating = models.DecimalField(
        max_digits=3, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(5)]
    )
    notes = models.TextField(blank=True)

    orders_in_progress = models.JSONField(null=True, blank=True)
    accounts_created = models.JSONField(null=True, blank=True)

    objects = ShiftReportQuerySet.as_manager()

    class Meta:
        db_table = 'shift_reports'
        ordering = ['-report_date', '-shift']
        indexes = [
            models.Index(fields=['account', 'report_date'], name='shift_reports_account_date_idx'),
            models.Index(fields=['reported_by', 'created_at'], name='shift_reports_reporter_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['account', 'report_date', 'shift'],
                name='unique_shift_report_per_account'
            )
        ]

    def __str__(self):
        return f"{self.account} {self.report_date} {self.shift}"

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._stored_identity = (instance.__dict__.get('report_date'), instance.__dict__.get('shift'))
        return instance

    def clean(self):
        # date and shift identify the report once it exists
        stored = getattr(self, '_stored_identity', None)
        if self.pk and stored and stored != (self.report_date, self.shift):
            raise ValidationError({'report_date': 'Report date and shift cannot be changed.'})

    @property
    def orders_in_progress_items(self):
        return parse_orders_in_progress(self.orders_in_progress)

    @property
    def accounts_created_items(self):
        return parse_accounts_created(self.accounts_created)

    @property
    def reporter_name(self):
        """Reporter display name; "Unknown" once the member is gone."""
        return display_name(self.reported_by)
