# jobs/urls.py
from django.urls import path
from . import api, views

urlpatterns = [
    # job browsing
    path('jobs/', views.job_list, name='job_list'),                          # /jobs/?search=&page=
    path('jobs/<int:job_id>/apply/', views.job_apply, name='job_apply'),
    path('jobs/<int:job_id>/', views.job_detail, name='job_detail'),

    # HR-facing job management
    path('hr/jobs/create/', views.job_create, name='job_create'),
    path('hr/jobs/inactive/', views.inactive_job_list, name='inactive_job_list'),
    path('hr/jobs/<int:job_id>/edit/', views.job_edit, name='job_edit'),
    path('hr/jobs/<int:job_id>/delete/', views.job_delete, name='job_delete'),
    path('hr/jobs/<int:job_id>/kill/', views.job_kill, name='job_kill'),
    path('hr/jobs/<int:job_id>/restore/', views.job_restore, name='job_restore'),
    path('hr/applications/', views.hr_applications, name='hr_applications'),
    path('hr/applications/<int:app_id>/status/', views.hr_application_status, name='hr_application_status'),

    # applicant pages
    path('applications/my/', views.my_applications, name='my_applications'),

    # JSON API
    path('api/job/', api.job_collection, name='api_job_collection'),
    path('api/job/filter-options/', api.job_filter_options, name='api_job_filter_options'),
    path('api/job/<int:job_id>/', api.job_item, name='api_job_item'),
    path('api/application/', api.application_collection, name='api_application_collection'),
    path('api/upload/', api.resume_upload, name='api_resume_upload'),
]
