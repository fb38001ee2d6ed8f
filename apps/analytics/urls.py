from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Spend figures
    path('summary/', views.spend_summary, name='summary'),
    path('categories/', views.category_spend, name='categories'),

    # Due dates
    path('upcoming/', views.upcoming_bills, name='upcoming'),
    path('calendar/', views.calendar_view, name='calendar'),

    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),
]
