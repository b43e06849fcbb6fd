from django.urls import path
from . import views
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
)

urlpatterns = [
    path('health', views.healthcheck, name='healthcheck'),
    path('token', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('token/refresh', TokenRefreshView.as_view(), name='token_refresh'),
    path(
        'surveys/<int:pk>/redirect-settings/',
        views.RedirectSettingsView.as_view(),
        name='survey-redirect-settings',
    ),
]
