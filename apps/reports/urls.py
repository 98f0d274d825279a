from django.urls import path
from . import views

app_name = "reports"

urlpatterns = [
    path('', views.report_submit_index, name='report_submit_index'),
    path('<int:account_id>/', views.report_submit, name='report_submit'),
    path('history/', views.report_history, name='report_history'),
    path('export/', views.report_export, name='report_export'),
    path('<int:pk>/edit/', views.report_edit, name='report_edit'),
]
