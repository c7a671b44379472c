# jobs/services.py
import logging
from dataclasses import dataclass, field
from typing import List

from django.db import DatabaseError
from django.db.models import Count
from django.utils.translation import gettext as _

from .filters import JobFilterCriteria, as_q, build_constraints, page_window
from .models import EMPLOYMENT_TYPES, Job
from .pagination import total_pages_for

logger = logging.getLogger(__name__)

ORDERING = ('-created_at', '-id')


class JobFetchError(Exception):
    """The store failed while serving a paginated search."""


@dataclass
class PageResult:
    jobs: List[Job] = field(default_factory=list)
    total_count: int = 0
    total_pages: int = 0
    current_page: int = 1

    def to_dict(self):
        return {
            'jobs': [job.to_dict() for job in self.jobs],
            'totalCount': self.total_count,
            'totalPages': self.total_pages,
            'currentPage': self.current_page,
        }


def _source(jobs):
    return Job.objects.all() if jobs is None else jobs.all()


def _with_counts(qs):
    return qs.select_related('posted_by').annotate(applicant_count=Count('applications'))


# -------------------------
# Paginated search
# -------------------------
def search_jobs(criteria, privileged=False, page=None, limit=None, jobs=None):
    """
    One page of postings matching ``criteria``.

    ``jobs`` is the data source (a manager or queryset of Job); the page and
    the total count are both read through the same predicate. Store failures
    are logged and raised as JobFetchError.
    """
    if criteria is None:
        criteria = JobFilterCriteria()
    window = page_window(page, limit)
    predicate = as_q(build_constraints(criteria, privileged=privileged))
    matching = _source(jobs).filter(predicate)

    try:
        total_count = matching.count()
        rows = list(
            _with_counts(matching).order_by(*ORDERING)[window.offset:window.offset + window.limit]
        )
    except DatabaseError as exc:
        logger.exception("Paginated job search failed (criteria=%s page=%s)", criteria, window.page)
        raise JobFetchError(str(exc)) from exc

    return PageResult(
        jobs=rows,
        total_count=total_count,
        total_pages=total_pages_for(total_count, window.limit),
        current_page=window.page,
    )


# -------------------------
# Unpaginated listings (degrade to [] on store failure)
# -------------------------
def list_jobs(privileged=False, include_inactive=False, jobs=None):
    qs = _source(jobs)
    if not (privileged and include_inactive):
        qs = qs.filter(is_active=True)
    try:
        return list(_with_counts(qs).order_by(*ORDERING))
    except DatabaseError:
        logger.exception("Fetching jobs failed")
        return []


def filter_jobs(criteria, privileged=False, jobs=None):
    predicate = as_q(build_constraints(criteria, privileged=privileged))
    try:
        return list(_with_counts(_source(jobs).filter(predicate)).order_by(*ORDERING))
    except DatabaseError:
        logger.exception("Search and filter jobs failed (criteria=%s)", criteria)
        return []


def inactive_jobs(jobs=None):
    try:
        return list(_with_counts(_source(jobs).filter(is_active=False)).order_by('-killed_at', '-id'))
    except DatabaseError:
        logger.exception("Fetching inactive jobs failed")
        return []


def filter_options(jobs=None):
    """Choices for the search form, taken from the active postings."""
    active = _source(jobs).filter(is_active=True)
    try:
        departments = sorted(set(d for d in active.values_list('department', flat=True) if d))
        locations = sorted(set(loc for loc in active.values_list('location', flat=True) if loc))
    except DatabaseError:
        logger.exception("Loading filter options failed")
        departments, locations = [], []
    return {
        'departments': departments,
        'locations': locations,
        'employmentTypes': [{'value': value, 'label': label} for value, label in EMPLOYMENT_TYPES],
    }


# -------------------------
# Lifecycle
# -------------------------
def kill_job(job_id, jobs=None, actor=None):
    """Close a posting by id. Raises Job.DoesNotExist for unknown ids."""
    job = _source(jobs).get(id=job_id)
    job.kill()
    logger.info("Job %s killed by %s", job.id, actor or 'system')
    return job


def restore_job(job_id, jobs=None, actor=None):
    job = _source(jobs).get(id=job_id)
    job.restore()
    logger.info("Job %s restored by %s", job.id, actor or 'system')
    return job


def validate_job_data(data):
    """Returns (ok, error message)."""
    title = data.get('title')
    if not title or not str(title).strip():
        return False, _("Job title is required.")
    return True, None
