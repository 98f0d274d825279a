from django.urls import path
from . import views

app_name = "alerts"

urlpatterns = [
    path('missing-reports/', views.missing_reports_alert, name='missing_reports_alert'),
]
