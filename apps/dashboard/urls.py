from django.urls import path
from . import views

app_name = "dashboard"

urlpatterns = [
    path('', views.home, name='home'),
    path('summary/', views.summary, name='summary'),
    path('summary/export/', views.summary_export, name='summary_export'),
    path('analytics/', views.analytics, name='analytics'),
]
