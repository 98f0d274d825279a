from django.contrib import admin
from django.urls import path, include

from apps.alerts import views as alert_views

urlpatterns = [
    path('', include('apps.dashboard.urls')),

    path('admin/', admin.site.urls),
    path('accounts/', include('apps.accounts.urls')),
    path('reports/', include('apps.reports.urls')),
    path('finances/', include('apps.finances.urls')),
    path('alerts/', include('apps.alerts.urls')),

    path('api/finances/', include('apps.finances.api_urls')),
    path('api/cron/check-missing-reports/', alert_views.cron_check_missing_reports, name='cron_check_missing_reports'),
]
