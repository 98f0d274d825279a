from django.contrib import admin
from .models import Expenditure, Withdraw


@admin.register(Withdraw)
class WithdrawAdmin(admin.ModelAdmin):
    list_display = ['withdraw_date', 'account', 'amount', 'payment_means', 'created_at']
    list_filter = ['payment_means', 'account__platform', 'withdraw_date']
    search_fields = ['account__username', 'notes']
    date_hierarchy = 'withdraw_date'
    list_select_related = ['account']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Expenditure)
class ExpenditureAdmin(admin.ModelAdmin):
    list_display = ['item_name', 'type_of_expenditure', 'cost', 'transaction_id', 'created_at']
    list_filter = ['type_of_expenditure', 'created_at']
    search_fields = ['item_name', 'transaction_id']
    readonly_fields = ['created_at', 'updated_at']
