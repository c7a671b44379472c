# jobs/api.py
"""
JSON endpoints behind the job board front end.

Every failure answers ``{"error": <message>}``; store errors are logged with
full detail and reported to the caller with a generic message only.
"""
import json
import logging

from django.core.files.storage import default_storage
from django.db import DatabaseError, IntegrityError
from django.http import JsonResponse
from django.utils.translation import gettext as _
from django.views.decorators.http import require_http_methods

from accounts.decorators import api_login_required, api_privileged_required, is_privileged
from .filters import JobFilterCriteria
from .forms import ResumeUploadForm
from .models import APPLICATION_STATUS, Application, Job
from .services import JobFetchError, filter_options, kill_job, restore_job, search_jobs, validate_job_data

logger = logging.getLogger(__name__)

JOB_FIELDS = (
    ('title', 'title'),
    ('description', 'description'),
    ('department', 'department'),
    ('location', 'location'),
    ('salary', 'salary'),
    ('employmentType', 'employment_type'),
    ('requirements', 'requirements'),
    ('responsibilities', 'responsibilities'),
    ('benefits', 'benefits'),
)
VALID_STATUSES = {value for value, _label in APPLICATION_STATUS}


def _error(message, status):
    return JsonResponse({'error': message}, status=status)


def _json_body(request):
    try:
        payload = json.loads(request.body.decode('utf-8') or '{}')
    except (ValueError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def _job_values(payload):
    values = {attr: (payload.get(key) or '') for key, attr in JOB_FIELDS}
    values['title'] = str(values['title']).strip()
    values['employment_type'] = values['employment_type'] or 'FULL_TIME'
    return values


# -------------------------
# /api/job/
# -------------------------
@require_http_methods(["GET", "POST"])
def job_collection(request):
    if request.method == 'POST':
        return _create_job(request)

    criteria = JobFilterCriteria.from_query_params(request.GET)
    try:
        result = search_jobs(
            criteria,
            privileged=is_privileged(request.user),
            page=request.GET.get('page'),
            limit=request.GET.get('limit'),
        )
    except JobFetchError:
        return _error(_('Unable to fetch job postings.'), 500)
    return JsonResponse(result.to_dict())


@api_privileged_required
def _create_job(request):
    payload = _json_body(request)
    if payload is None:
        return _error(_('Invalid JSON body.'), 400)
    ok, message = validate_job_data(payload)
    if not ok:
        return _error(message, 400)
    try:
        job = Job.objects.create(posted_by=request.user, **_job_values(payload))
    except DatabaseError:
        logger.exception("Creating job failed for %s", request.user.username)
        return _error(_('Unable to save the job posting.'), 500)
    logger.info("Job %s created by %s", job.id, request.user.username)
    return JsonResponse({'message': _('Job posting created.'), 'job': job.to_dict()}, status=201)


@require_http_methods(["GET"])
def job_filter_options(request):
    return JsonResponse(filter_options())


# -------------------------
# /api/job/<id>/
# -------------------------
@require_http_methods(["GET", "PUT", "PATCH", "DELETE"])
def job_item(request, job_id):
    if request.method == 'GET':
        return _job_detail(request, job_id)
    if request.method == 'PUT':
        return _update_job(request, job_id)
    if request.method == 'PATCH':
        return _change_job_state(request, job_id)
    return _delete_job(request, job_id)


def _job_detail(request, job_id):
    try:
        job = Job.objects.select_related('posted_by').get(id=job_id)
    except Job.DoesNotExist:
        return _error(_('Job posting not found.'), 404)
    except DatabaseError:
        logger.exception("Fetching job %s failed", job_id)
        return _error(_('Unable to fetch job postings.'), 500)
    if not job.is_active and not is_privileged(request.user):
        return _error(_('Job posting not found.'), 404)
    return JsonResponse({'job': job.to_dict()})


@api_privileged_required
def _update_job(request, job_id):
    payload = _json_body(request)
    if payload is None:
        return _error(_('Invalid JSON body.'), 400)
    ok, message = validate_job_data(payload)
    if not ok:
        return _error(message, 400)
    try:
        job = Job.objects.get(id=job_id)
        for attr, value in _job_values(payload).items():
            setattr(job, attr, value)
        job.save()
    except Job.DoesNotExist:
        return _error(_('Job posting not found.'), 404)
    except DatabaseError:
        logger.exception("Updating job %s failed", job_id)
        return _error(_('Unable to update the job posting.'), 500)
    logger.info("Job %s updated by %s", job.id, request.user.username)
    return JsonResponse({'message': _('Job posting updated.'), 'job': job.to_dict()})


@api_privileged_required
def _change_job_state(request, job_id):
    payload = _json_body(request)
    action = payload.get('action') if payload else None
    if action not in ('kill', 'restore'):
        return _error(_('Unknown action.'), 400)
    change_state = kill_job if action == 'kill' else restore_job
    try:
        job = change_state(job_id, actor=request.user.username)
    except Job.DoesNotExist:
        return _error(_('Job posting not found.'), 404)
    except DatabaseError:
        logger.exception("Job %s %s failed", job_id, action)
        if action == 'kill':
            return _error(_('Unable to close the job posting.'), 500)
        return _error(_('Unable to reopen the job posting.'), 500)
    return JsonResponse({'success': True, 'job': job.to_dict()})


@api_privileged_required
def _delete_job(request, job_id):
    try:
        deleted, _rows = Job.objects.filter(id=job_id).delete()
    except DatabaseError:
        logger.exception("Deleting job %s failed", job_id)
        return _error(_('Unable to delete the job posting.'), 500)
    if not deleted:
        return _error(_('Job posting not found.'), 404)
    logger.info("Job %s deleted by %s", job_id, request.user.username)
    return JsonResponse({'message': _('Job posting deleted.')})


# -------------------------
# /api/application/
# -------------------------
@require_http_methods(["GET", "POST", "PATCH"])
@api_login_required
def application_collection(request):
    if request.method == 'POST':
        return _apply(request)
    if request.method == 'PATCH':
        return _update_application_status(request)

    qs = Application.objects.select_related('job', 'job__posted_by', 'applicant')
    if not is_privileged(request.user):
        qs = qs.filter(applicant=request.user)
    try:
        apps = [app.to_dict() for app in qs.order_by('-created_at', '-id')]
    except DatabaseError:
        logger.exception("Fetching applications failed")
        return _error(_('Unable to fetch applications.'), 500)
    return JsonResponse(apps, safe=False)


def _apply(request):
    payload = _json_body(request)
    if payload is None:
        return _error(_('Invalid JSON body.'), 400)
    job_id = payload.get('jobId')
    if not job_id:
        return _error(_('Missing jobId.'), 400)

    try:
        job = Job.objects.get(id=job_id, is_active=True)
    except (Job.DoesNotExist, TypeError, ValueError):
        return _error(_('Job posting not found.'), 404)

    if Application.objects.filter(job=job, applicant=request.user).exists():
        return _error(_('You have already applied for this position.'), 400)

    try:
        Application.objects.create(
            applicant=request.user,
            job=job,
            resume_url=payload.get('resumeUrl') or '',
            cover_letter=payload.get('coverLetter') or '',
        )
    except IntegrityError:
        # lost a race against a concurrent submit for the same job
        return _error(_('You have already applied for this position.'), 400)
    except DatabaseError:
        logger.exception("Application by %s for job %s failed", request.user.username, job.id)
        return _error(_('Unable to submit the application.'), 500)
    logger.info("%s applied for job %s", request.user.username, job.id)
    return JsonResponse({'success': True}, status=201)


def _update_application_status(request):
    if not is_privileged(request.user):
        return _error(_('Insufficient permissions.'), 403)
    payload = _json_body(request) or {}
    app_id = payload.get('applicationId')
    status = payload.get('status')
    if not app_id or not status:
        return _error(_('applicationId and status are required.'), 400)
    if not isinstance(status, str) or status not in VALID_STATUSES:
        return _error(_('Invalid status.'), 400)
    try:
        app = Application.objects.select_related('job', 'applicant').get(id=app_id)
        app.status = status
        app.save(update_fields=['status'])
    except (Application.DoesNotExist, TypeError, ValueError):
        return _error(_('Application not found.'), 404)
    except DatabaseError:
        logger.exception("Updating application %s failed", app_id)
        return _error(_('Unable to update the application status.'), 500)
    logger.info("Application %s set to %s by %s", app.id, status, request.user.username)
    return JsonResponse({'success': True, 'application': app.to_dict()})


# -------------------------
# /api/upload/
# -------------------------
@require_http_methods(["POST"])
@api_login_required
def resume_upload(request):
    form = ResumeUploadForm(request.POST, request.FILES)
    if not form.is_valid():
        errors = form.errors.get('file') or [_('No file uploaded.')]
        return _error(str(errors[0]), 400)
    f = form.cleaned_data['file']
    try:
        path = default_storage.save(f"resumes/{request.user.id}/{f.name}", f)
    except OSError:
        logger.exception("Storing resume for %s failed", request.user.username)
        return _error(_('Unable to upload the file.'), 500)
    logger.info("Resume uploaded by %s -> %s", request.user.username, path)
    return JsonResponse({'url': default_storage.url(path), 'filename': f.name})
