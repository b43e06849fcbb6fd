from django.urls import path
from . import views

app_name = "redirects"

urlpatterns = [
    path("<slug:slug>/redirect/", views.survey_redirect_settings, name="settings"),
]
