# =============================================================================
# accounts/models.py - freelance accounts, gigs and payout details
# =============================================================================

"""
Freelance accounts

One Account per marketplace profile (Fiverr, Upwork) or direct client.
Each account has gigs, shift reports (apps.reports), withdrawals
(apps.finances) and at most one payout configuration.
"""

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.core.models import TimeStampedModel


PLATFORM_CHOICES = [
    ('fiverr', 'Fiverr'),
    ('upwork', 'Upwork'),
    ('direct', 'Direct'),
]
PLATFORMS = [value for value, _ in PLATFORM_CHOICES]

GIG_TYPES = [
    'APA/MLA',
    'SYSTEMATIC REVIEW & META ANALYSIS',
    'TRINETX',
    'TECH(AI | SOFTWARE DEV)',
    'BUSINESS SERVICES',
]


class Account(TimeStampedModel):
    """Marketplace account or direct client"""

    STATUS_CHOICES = [
        ('active', 'Active'),
        ('paused', 'Paused'),
        ('risk', 'At risk'),
    ]

    # ordered from lowest to highest tier
    LEVEL_CHOICES = [
        ('starter', 'Starter'),
        ('level1', 'Level 1'),
        ('level2', 'Level 2'),
        ('pro_rated', 'Pro Rated'),
        ('fiverr_vetted', 'Fiverr Vetted'),
    ]

    platform = models.CharField(max_length=10, choices=PLATFORM_CHOICES, db_index=True)
    email = models.EmailField(max_length=254)
    username = models.CharField(max_length=100, db_index=True)
    type_of_gigs = models.CharField(max_length=200, blank=True)
    currency = models.CharField(max_length=3, default='USD')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active', db_index=True)
    account_level = models.CharField(max_length=20, choices=LEVEL_CHOICES, default='starter')
    success_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    browser_type = models.CharField(max_length=100, blank=True)
    proxy = models.CharField(max_length=200, blank=True)
    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='accounts_created'
    )

    class Meta:
        db_table = 'accounts'
        ordering = ['platform', 'username']
        indexes = [
            models.Index(fields=['platform', 'status'], name='accounts_platform_status_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['platform', 'email'],
                name='unique_account_email_per_platform'
            )
        ]

    def __str__(self):
        return f"{self.get_platform_display()} - {self.username}"

    @property
    def is_active(self):
        return self.status == 'active'


class Gig(TimeStampedModel):
    """A gig listed on an account"""

    TYPE_CHOICES = [(gig_type, gig_type) for gig_type in GIG_TYPES]

    STATUS_CHOICES = [
        ('active', 'Active'),
        ('paused', 'Paused'),
        ('deprecated', 'Deprecated'),
    ]

    RATING_TYPE_CHOICES = [
        ('client', 'Client'),
        ('paypal', 'PayPal'),
        ('cash', 'Cash'),
    ]

    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='gigs')
    name = models.CharField(max_length=200)
    type = models.CharField(max_length=64, choices=TYPE_CHOICES)
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default='active', db_index=True)

    # Rating information
    rated = models.BooleanField(default=False, db_index=True)
    last_rated_date = models.DateField(null=True, blank=True)
    next_possible_rate_date = models.DateField(null=True, blank=True)
    rating_type = models.CharField(max_length=10, choices=RATING_TYPE_CHOICES, blank=True)
    rating_email = models.EmailField(blank=True)

    class Meta:
        db_table = 'gigs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['account', 'status'], name='gigs_account_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.account.username})"

    def clean(self):
        errors = {}
        if self.rated and self.last_rated_date and self.next_possible_rate_date:
            if self.next_possible_rate_date < self.last_rated_date:
                errors['next_possible_rate_date'] = 'Next possible rate date cannot be before the last rated date.'
        if errors:
            raise ValidationError(errors)

    def normalize_rating(self):
        """
        Drop rating data that does not apply

        - not rated: every rating field is cleared
        - rated but not through paypal: rating_email is cleared
        """
        if not self.rated:
            self.last_rated_date = None
            self.next_possible_rate_date = None
            self.rating_type = ''
            self.rating_email = ''
        elif self.rating_type != 'paypal':
            self.rating_email = ''

    def save(self, *args, **kwargs):
        self.normalize_rating()
        super().save(*args, **kwargs)


class PayoutDetail(TimeStampedModel):
    """Where an account's withdrawals are paid out (one per account)"""

    GATEWAY_CHOICES = [
        ('bank', 'Bank'),
        ('paypal', 'PayPal'),
        ('payoneer', 'Payoneer'),
    ]

    account = models.OneToOneField(Account, on_delete=models.CASCADE, related_name='payout_detail')
    payment_gateway = models.CharField(max_length=10, choices=GATEWAY_CHOICES)
    mobile_number = models.CharField(max_length=32, blank=True)

    class Meta:
        db_table = 'payout_details'
        ordering = ['account__platform', 'account__username']

    def __str__(self):
        return f"{self.account} via {self.get_payment_gateway_display()}"
