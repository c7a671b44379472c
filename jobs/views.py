# jobs/views.py
import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError, IntegrityError
from django.http import Http404
from django.shortcuts import render, get_object_or_404, redirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.utils.translation import gettext as _
from django.views.decorators.http import require_POST

from accounts.decorators import privileged_required, is_privileged
from .filters import JobFilterCriteria
from .forms import ApplyForm, ApplicationStatusForm, JobForm, JobSearchForm
from .models import Application, Job
from .services import JobFetchError, filter_options, inactive_jobs, kill_job, restore_job, search_jobs

logger = logging.getLogger(__name__)


# -------------------------
# Browsing
# -------------------------
def job_list(request):
    """
    Paginated, filterable job list. Applicants only ever see active postings;
    HR/admin can add ?includeInactive=true to see killed ones too.
    """
    criteria = JobFilterCriteria.from_query_params(request.GET)
    privileged = is_privileged(request.user)
    options = filter_options()
    form = JobSearchForm(request.GET or None, options=options)
    if form.is_bound and not form.is_valid():
        # errors are shown on the form; unparseable values are dropped from the search
        logger.debug("Job search form errors: %s", form.errors.as_json())
    context = {
        'form': form,
        'criteria': criteria,
        'privileged': privileged,
        # everything except the page number, for building page links
        'query_string': _query_without_page(request.GET),
    }
    try:
        result = search_jobs(
            criteria,
            privileged=privileged,
            page=request.GET.get('page'),
            limit=request.GET.get('limit'),
        )
    except JobFetchError:
        context['error'] = _('Unable to fetch job postings.')
        return render(request, 'jobs/job_list.html', context, status=500)

    context['result'] = result
    return render(request, 'jobs/job_list.html', context)


def _query_without_page(querydict):
    params = querydict.copy()
    params.pop('page', None)
    return params.urlencode()


def job_detail(request, job_id):
    job = get_object_or_404(Job.objects.select_related('posted_by'), id=job_id)
    if not job.is_active and not is_privileged(request.user):
        raise Http404("Job posting not found.")
    already_applied = (
        request.user.is_authenticated
        and Application.objects.filter(job=job, applicant=request.user).exists()
    )
    return render(request, 'jobs/job_detail.html', {
        'job': job,
        'form': ApplyForm(),
        'already_applied': already_applied,
    })


# -------------------------
# Job CRUD (HR / admin)
# -------------------------
@privileged_required
def job_create(request):
    if request.method == 'POST':
        form = JobForm(request.POST)
        if form.is_valid():
            job = form.save(commit=False)
            job.posted_by = request.user
            job.save()
            logger.info("Job %s created by %s", job.id, request.user.username)
            messages.success(request, "Job posted successfully.")
            return redirect('job_detail', job_id=job.id)
    else:
        form = JobForm()
    return render(request, 'jobs/job_form.html', {'form': form})


@privileged_required
def job_edit(request, job_id):
    job = get_object_or_404(Job, id=job_id)
    if request.method == 'POST':
        form = JobForm(request.POST, instance=job)
        if form.is_valid():
            form.save()
            messages.success(request, "Job updated.")
            return redirect('job_detail', job_id=job.id)
    else:
        form = JobForm(instance=job)
    return render(request, 'jobs/job_form.html', {'form': form, 'job': job})


@privileged_required
def job_delete(request, job_id):
    job = get_object_or_404(Job, id=job_id)
    if request.method == 'POST':
        job.delete()
        logger.info("Job %s deleted by %s", job_id, request.user.username)
        messages.success(request, "Job deleted.")
        return redirect('hr_dashboard')
    return render(request, 'jobs/job_confirm_delete.html', {'job': job})


def _next_url(request, default):
    nxt = request.POST.get('next')
    if nxt and url_has_allowed_host_and_scheme(nxt, allowed_hosts={request.get_host()}):
        return nxt
    return default


@require_POST
@privileged_required
def job_kill(request, job_id):
    try:
        kill_job(job_id, actor=request.user.username)
    except Job.DoesNotExist:
        raise Http404("Job posting not found.")
    except DatabaseError:
        logger.exception("Killing job %s failed", job_id)
        messages.error(request, _('Unable to close the job posting.'))
    else:
        messages.success(request, "Job posting closed.")
    return redirect(_next_url(request, 'hr_dashboard'))


@require_POST
@privileged_required
def job_restore(request, job_id):
    try:
        restore_job(job_id, actor=request.user.username)
    except Job.DoesNotExist:
        raise Http404("Job posting not found.")
    except DatabaseError:
        logger.exception("Restoring job %s failed", job_id)
        messages.error(request, _('Unable to reopen the job posting.'))
    else:
        messages.success(request, "Job posting reopened.")
    return redirect(_next_url(request, 'inactive_job_list'))


@privileged_required
def inactive_job_list(request):
    return render(request, 'jobs/inactive_jobs.html', {'jobs': inactive_jobs()})


# -------------------------
# HR: applications
# -------------------------
@privileged_required
def hr_applications(request):
    applications = Application.objects.select_related('applicant', 'job').order_by('-created_at')
    status = request.GET.get('status', '').strip()
    if status:
        applications = applications.filter(status=status)
    job_id = request.GET.get('job', '').strip()
    if job_id.isdigit():
        applications = applications.filter(job_id=int(job_id))
    return render(request, 'jobs/hr_applications.html', {
        'applications': applications,
        'status': status,
        'status_form': ApplicationStatusForm(),
    })


@require_POST
@privileged_required
def hr_application_status(request, app_id):
    app = get_object_or_404(Application, id=app_id)
    form = ApplicationStatusForm(request.POST)
    if form.is_valid():
        app.status = form.cleaned_data['status']
        app.save(update_fields=['status'])
        logger.info("Application %s set to %s by %s", app.id, app.status, request.user.username)
        messages.success(request, "Application status updated.")
    else:
        messages.error(request, "Invalid status.")
    return redirect('hr_applications')


# -------------------------
# Application flow
# -------------------------
@login_required
@require_POST
def job_apply(request, job_id):
    job = get_object_or_404(Job, id=job_id, is_active=True)
    form = ApplyForm(request.POST, request.FILES)
    if not form.is_valid():
        return render(request, 'jobs/job_detail.html', {'job': job, 'form': form, 'already_applied': False}, status=400)

    if Application.objects.filter(job=job, applicant=request.user).exists():
        messages.error(request, _('You have already applied for this position.'))
        return redirect('job_detail', job_id=job.id)

    uploaded_file = form.cleaned_data.get('uploaded_resume')
    try:
        application = Application.objects.create(
            applicant=request.user,
            job=job,
            cover_letter=form.cleaned_data.get('cover_letter', ''),
        )
        if uploaded_file:
            application.uploaded_resume.save(uploaded_file.name, uploaded_file, save=True)
    except IntegrityError:
        messages.error(request, _('You have already applied for this position.'))
        return redirect('job_detail', job_id=job.id)
    logger.info("%s applied for job %s", request.user.username, job.id)
    messages.success(request, "Application submitted successfully.")
    return redirect('my_applications')


@login_required
def my_applications(request):
    apps = Application.objects.filter(applicant=request.user).select_related('job').order_by('-created_at')
    return render(request, 'jobs/my_applications.html', {'applications': apps})
