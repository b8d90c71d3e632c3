from __future__ import annotations

from django.urls import path

from . import views

app_name = "messageboards"

urlpatterns = [
    path("", views.messageboard_list, name="messageboard_list"),
    path("new/", views.messageboard_create, name="messageboard_create"),
    path("moderation/", views.moderation_pending, name="moderation_pending"),
    path("preferences/", views.preferences, name="preferences"),
    path("private-topics/new/", views.private_topic_create, name="private_topic_create"),
    path("private-topics/<int:pk>/", views.private_topic_detail, name="private_topic_detail"),
    path("users/<str:username>/", views.user_detail, name="user_detail"),
    path("<slug:messageboard_id>/", views.messageboard_detail, name="messageboard_detail"),
    path("<slug:messageboard_id>/topics/new/", views.topic_create, name="topic_create"),
    path("<slug:messageboard_id>/<slug:topic_slug>/", views.topic_detail, name="topic_detail"),
]
