# accounts/views.py
import logging

from django.contrib.auth import login
from django.contrib.auth.decorators import login_required
from django.db.models import Count, Q
from django.shortcuts import render, redirect

from jobs.filters import JobFilterCriteria
from jobs.models import Job, Application
from jobs.services import filter_jobs, list_jobs
from .decorators import privileged_required, is_privileged
from .forms import UserSignupForm

logger = logging.getLogger(__name__)

RECENT_APPLICATIONS = 5


def signup(request):
    if request.method == 'POST':
        form = UserSignupForm(request.POST)
        if form.is_valid():
            user = form.save()
            logger.info("New %s account: %s", user.role, user.username)
            # auto-login after signup
            login(request, user)
            return redirect('dashboard-redirect')
    else:
        form = UserSignupForm()
    return render(request, 'accounts/signup.html', {'form': form})


@login_required
def dashboard_redirect(request):
    if is_privileged(request.user):
        return redirect('hr_dashboard')
    return redirect('user_dashboard')


@login_required
def user_dashboard(request):
    """
    Applicant dashboard: open positions count plus the applicant's own
    application counts by status and the latest few applications.
    """
    mine = Application.objects.filter(applicant=request.user)
    stats = mine.aggregate(
        total=Count('id'),
        pending=Count('id', filter=Q(status='PENDING')),
        accepted=Count('id', filter=Q(status='ACCEPTED')),
        rejected=Count('id', filter=Q(status='REJECTED')),
    )
    context = {
        'active_job_count': Job.objects.filter(is_active=True).count(),
        'stats': stats,
        'recent_applications': mine.select_related('job').order_by('-created_at')[:RECENT_APPLICATIONS],
    }
    return render(request, 'accounts/user_dashboard.html', context)


@privileged_required
def hr_dashboard(request):
    """
    HR dashboard: posting and application totals, every posting with its
    applicant count, and the most recent applications.
    """
    job_stats = Job.objects.aggregate(
        total=Count('id'),
        active=Count('id', filter=Q(is_active=True)),
    )
    app_stats = Application.objects.aggregate(
        total=Count('id'),
        pending=Count('id', filter=Q(status='PENDING')),
        accepted=Count('id', filter=Q(status='ACCEPTED')),
    )
    # open and closed postings alike; the search box narrows by keyword
    search = request.GET.get('search', '').strip()
    if search:
        jobs = filter_jobs(JobFilterCriteria(search_keyword=search, include_inactive=True), privileged=True)
    else:
        jobs = list_jobs(privileged=True, include_inactive=True)
    recent = Application.objects.select_related('applicant', 'job').order_by('-created_at')[:RECENT_APPLICATIONS]
    return render(request, 'accounts/hr_dashboard.html', {
        'job_stats': job_stats,
        'app_stats': app_stats,
        'jobs': jobs,
        'search': search,
        'recent_applications': recent,
    })
