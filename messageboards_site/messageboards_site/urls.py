"""URL configuration for messageboards_site.

The messageboards app is mounted under ``/forum/``; host projects can mount
it anywhere as long as the ``messageboards`` namespace is kept.
"""
from __future__ import annotations

from django.urls import include, path

urlpatterns = [
    path('forum/', include('messageboards.urls')),
]
