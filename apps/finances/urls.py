from django.urls import path
from . import views

app_name = "finances"

urlpatterns = [
    path('', views.finances_page, name='finances_page'),
    path('withdraws/new/', views.withdraw_create, name='withdraw_create'),
    path('expenditures/new/', views.expenditure_create, name='expenditure_create'),
    path('payout-details/new/', views.payout_detail_save, name='payout_detail_save'),
]
