# hrboard/urls.py
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.views.generic import RedirectView

urlpatterns = [
    path('admin/', admin.site.urls),

    # Auth (login/logout/password reset), signup and dashboards
    path('accounts/', include('django.contrib.auth.urls')),
    path('accounts/', include('accounts.urls')),

    # Home
    path('', RedirectView.as_view(pattern_name='job_list', permanent=False), name='home'),

    # Job board pages and JSON API
    path('', include('jobs.urls')),
]

# Serve media in development (only when DEBUG=True)
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
