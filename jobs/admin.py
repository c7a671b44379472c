from django.contrib import admin
from .models import Job, Application


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('title', 'department', 'location', 'employment_type', 'posted_by', 'created_at', 'is_active', 'killed_at')
    list_filter = ('is_active', 'employment_type', 'department')
    search_fields = ('title', 'description', 'requirements')
    readonly_fields = ('salary_value', 'killed_at')
    actions = ('kill_selected', 'restore_selected')

    @admin.action(description="Close selected postings")
    def kill_selected(self, request, queryset):
        for job in queryset.filter(is_active=True):
            job.kill()

    @admin.action(description="Reopen selected postings")
    def restore_selected(self, request, queryset):
        for job in queryset.filter(is_active=False):
            job.restore()


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ('applicant', 'job', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('applicant__username', 'job__title')
