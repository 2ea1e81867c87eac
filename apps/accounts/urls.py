from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('user/', views.get_current_user, name='current-user'),
    path('landing/', views.landing, name='landing'),

    # Business profile
    path('profile/', views.profile, name='profile'),
    path('profile/logo/', views.upload_profile_logo, name='profile-logo'),
    path('profile/completeness/', views.profile_completeness, name='profile-completeness'),
    path('onboarding/', views.onboarding, name='onboarding'),
]
