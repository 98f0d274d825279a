# =============================================================================
# finances/models.py - withdrawals and expenditures
# =============================================================================

"""
Money leaving the operation

Both tables are append-only ledgers: rows are created, never edited.
"""
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from apps.accounts.models import Account
from apps.core.models import TimeStampedModel


class Withdraw(TimeStampedModel):
    """Funds withdrawn from an account"""

    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='withdrawals')
    amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    withdraw_date = models.DateField(db_index=True)
    payment_means = models.CharField(max_length=50, default='Other')
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'withdraws'
        ordering = ['-withdraw_date', '-id']

    def __str__(self):
        return f"{self.account} {self.amount} on {self.withdraw_date}"


class Expenditure(TimeStampedModel):
    """Operating cost"""

    TYPE_CHOICES = [
        ('internet', 'Internet'),
        ('rent', 'Rent'),
        ('proxy', 'Proxy'),
        ('electricity', 'Electricity'),
        ('water', 'Water'),
        ('meals', 'Meals'),
        ('office_furniture', 'Office furniture'),
        ('electronics', 'Electronics'),
    ]

    item_name = models.CharField(max_length=200)
    type_of_expenditure = models.CharField(max_length=20, choices=TYPE_CHOICES, db_index=True)
    cost = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    transaction_id = models.CharField(max_length=100, blank=True)

    class Meta:
        db_table = 'expenditures'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.item_name} ({self.get_type_of_expenditure_display()})"
