from django.contrib import admin
from .models import ShiftReport


@admin.register(ShiftReport)
class ShiftReportAdmin(admin.ModelAdmin):
    list_display = [
        'report_date',
        'shift',
        'account',
        'orders_completed',
        'pending_orders',
        'available_balance',
        'ranking_page',
        'reported_by',
    ]

    list_filter = [
        'shift',
        'account__platform',
        'report_date',
    ]

    search_fields = [
        'account__username',
        'account__email',
        'notes',
        'reported_by__username',
    ]

    fieldsets = [
        ('Report', {
            'fields': ('account', 'report_date', 'shift', 'reported_by', 'handed_over_to')
        }),
        ('Orders', {
            'fields': ('orders_completed', 'pending_orders', 'orders_in_progress_value', 'orders_in_progress')
        }),
        ('Balances', {
            'fields': ('available_balance', 'pending_balance', 'earnings_to_date')
        }),
        ('Standing', {
            'fields': ('ranking_page', 'rating', 'success_rate', 'response_rate')
        }),
        ('Other', {
            'fields': ('accounts_created', 'notes', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'report_date'
    list_select_related = ['account', 'reported_by']
    ordering = ['-report_date', '-shift']
