from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path("", RedirectView.as_view(url="/surveys/", permanent=False)),
    path("admin/", admin.site.urls),
    path(
        "accounts/login/",
        auth_views.LoginView.as_view(template_name="registration/login.html"),
        name="login",
    ),
    path("accounts/logout/", auth_views.LogoutView.as_view(), name="logout"),
    path("surveys/", include("revisit_app.surveys.urls")),
    path("surveys/", include("revisit_app.redirects.urls")),
    path("api/", include("revisit_app.api.urls")),
]

# Custom error handlers
handler403 = "revisit_app.core.error_handlers.custom_permission_denied_view"
handler404 = "revisit_app.core.error_handlers.custom_page_not_found_view"
handler500 = "revisit_app.core.error_handlers.custom_server_error_view"
