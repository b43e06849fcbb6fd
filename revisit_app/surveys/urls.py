from django.urls import path
from . import views

app_name = "surveys"

urlpatterns = [
    # Participant routes
    path("<slug:slug>/take/", views.survey_take, name="take"),
    path("<slug:slug>/take/token/<str:token>/", views.survey_take_token, name="take_token"),
    path("<slug:slug>/thank-you/", views.survey_thank_you, name="thank_you"),
]
