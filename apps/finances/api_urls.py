from django.urls import path
from . import api

app_name = "finances_api"

urlpatterns = [
    path('expenditures/', api.expenditure_create, name='expenditure_create'),
    path('withdraws/', api.withdraw_create, name='withdraw_create'),
    path('payout-details/', api.payout_detail_save, name='payout_detail_save'),
]
