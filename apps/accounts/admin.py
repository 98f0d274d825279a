from django.contrib import admin
from .models import Account, Gig, PayoutDetail


class GigInline(admin.TabularInline):
    model = Gig
    extra = 0
    fields = ['name', 'type', 'status', 'rated', 'next_possible_rate_date']


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = [
        'username',
        'platform',
        'email',
        'status',
        'account_level',
        'currency',
        'created_at',
    ]

    list_display_links = ['username', 'email']

    list_filter = [
        'platform',
        'status',
        'account_level',
        'created_at',
    ]

    search_fields = [
        'username',
        'email',
        'type_of_gigs',
    ]

    fieldsets = [
        ('Account', {
            'fields': ('platform', 'email', 'username', 'type_of_gigs', 'currency')
        }),
        ('Standing', {
            'fields': ('status', 'account_level', 'success_rate')
        }),
        ('Access', {
            'fields': ('browser_type', 'proxy'),
            'classes': ('collapse',),
        }),
        ('Audit', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']
    inlines = [GigInline]
    ordering = ['platform', 'username']


@admin.register(Gig)
class GigAdmin(admin.ModelAdmin):
    list_display = ['name', 'account', 'type', 'status', 'rated', 'rating_type', 'next_possible_rate_date']
    list_filter = ['type', 'status', 'rated', 'rating_type']
    search_fields = ['name', 'account__username', 'rating_email']
    list_select_related = ['account']


@admin.register(PayoutDetail)
class PayoutDetailAdmin(admin.ModelAdmin):
    list_display = ['account', 'payment_gateway', 'mobile_number', 'updated_at']
    list_filter = ['payment_gateway']
    search_fields = ['account__username', 'account__email', 'mobile_number']
    list_select_related = ['account']
