from django.contrib import admin
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = [
        'user',
        'get_email',
        'role',
        'external_id',
        'created_at',
    ]

    list_display_links = ['user', 'get_email']

    list_filter = [
        'role',
        'created_at',
    ]

    search_fields = [
        'user__username',
        'user__email',
        'user__first_name',
        'user__last_name',
        'external_id',
    ]

    fieldsets = [
        ('Member', {
            'fields': ('user', 'role')
        }),
        ('Identity provider', {
            'fields': ('external_id',),
            'classes': ('wide',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']

    @admin.display(description='Email')
    def get_email(self, obj):
        return obj.user.email
