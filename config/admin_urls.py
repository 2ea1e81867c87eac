"""Back-office routes, mounted under /api/admin/."""
from django.urls import path

from apps.accounts import views as account_views
from apps.analytics import views as analytics_views
from apps.campaigns import views as campaign_views

app_name = 'backoffice'

urlpatterns = [
    # GET /api/admin/users/             - All business profiles, newest first
    path('users/', account_views.admin_user_list, name='users'),

    # Platform analytics
    path('stats/', analytics_views.admin_stats, name='stats'),
    path('trends/', analytics_views.platform_trends, name='trends'),
    path('activity/', analytics_views.site_activity, name='activity'),

    # Campaigns
    path('campaign-recipients/', campaign_views.campaign_recipients, name='campaign-recipients'),
    path('campaigns/', campaign_views.campaign_history, name='campaign-history'),
    path('dispatch-campaign', campaign_views.dispatch_campaign, name='dispatch-campaign'),
    path('dispatch-campaign/', campaign_views.dispatch_campaign, name='dispatch-campaign-slash'),
]
