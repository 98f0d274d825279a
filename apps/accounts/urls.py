from django.urls import path
from . import views

app_name = "accounts"

urlpatterns = [
    path('', views.account_list, name='account_list'),
    path('new/', views.account_create, name='account_create'),
    path('ranking/', views.account_ranking, name='account_ranking'),
    path('ratings/', views.rating_information, name='rating_information'),
    path('created/', views.accounts_created, name='accounts_created'),
    path('export/', views.account_export, name='account_export'),
    path('<int:pk>/', views.account_detail, name='account_detail'),
    path('<int:pk>/edit/', views.account_edit, name='account_edit'),
    path('<int:pk>/delete/', views.account_delete, name='account_delete'),
    path('<int:pk>/gigs/new/', views.gig_create, name='gig_create'),
    path('gigs/<int:gig_id>/edit/', views.gig_edit, name='gig_edit'),
    path('gigs/<int:gig_id>/delete/', views.gig_delete, name='gig_delete'),
]
