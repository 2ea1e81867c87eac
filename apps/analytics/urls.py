from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Business dashboard
    path('dashboard/', views.dashboard, name='dashboard'),
    path('chart/', views.sales_chart, name='sales-chart'),

    # Page view tracking
    path('activity/', views.track_page_view, name='track-page-view'),
]
