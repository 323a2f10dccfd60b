"""
URL configuration for the command endpoint.
"""

from django.urls import path

from api.v1.commands import views

app_name = "commands"

urlpatterns = [
    path(
        "",
        views.CommandView.as_view(),
        name="dispatch",
    ),
]
