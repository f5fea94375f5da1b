# scoreboard/urls.py
from django.contrib import admin
from django.urls import path, include

from core import views as core_views

urlpatterns = [
    path("admin/", admin.site.urls),

    # landing page
    path("", core_views.home, name="home"),

    path("golf/", include("golf.urls")),
    path("", include("boards.urls")),
]
