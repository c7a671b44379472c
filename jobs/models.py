# jobs/models.py
import os
import re

from django.conf import settings
from django.db import models
from django.utils import timezone

EMPLOYMENT_TYPES = (
    ('FULL_TIME', 'Full-time'),
    ('PART_TIME', 'Part-time'),
    ('CONTRACT', 'Contract'),
    ('INTERNSHIP', 'Internship'),
)

_SALARY_NUMBER = re.compile(r'\d[\d,]*')


def parse_salary_value(salary_text):
    """
    Pull the first number out of a free-text salary ("30,000 - 45,000 / month" -> 30000).
    Returns None when the text holds no number.
    """
    if not salary_text:
        return None
    m = _SALARY_NUMBER.search(str(salary_text))
    if not m:
        return None
    return int(m.group(0).replace(',', ''))


class Job(models.Model):
    posted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='posted_jobs'
    )
    title = models.CharField(max_length=255)
    department = models.CharField(max_length=255, blank=True)
    location = models.CharField(max_length=255, blank=True)
    salary = models.CharField(max_length=100, blank=True)
    salary_value = models.PositiveIntegerField(null=True, blank=True, editable=False)
    employment_type = models.CharField(max_length=20, choices=EMPLOYMENT_TYPES, default='FULL_TIME')
    description = models.TextField(blank=True)
    requirements = models.TextField(blank=True)
    responsibilities = models.TextField(blank=True)
    benefits = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    killed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.title} @ {self.department or '—'}"

    def save(self, *args, **kwargs):
        self.salary_value = parse_salary_value(self.salary)
        super().save(*args, **kwargs)

    def kill(self):
        """Soft delete: hide the posting from applicants, keep the row."""
        self.is_active = False
        self.killed_at = timezone.now()
        self.save(update_fields=['is_active', 'killed_at', 'updated_at'])

    def restore(self):
        self.is_active = True
        self.killed_at = None
        self.save(update_fields=['is_active', 'killed_at', 'updated_at'])

    def to_dict(self):
        poster = self.posted_by
        data = {
            'id': self.id,
            'title': self.title,
            'department': self.department,
            'location': self.location,
            'salary': self.salary,
            'employmentType': self.employment_type,
            'description': self.description,
            'requirements': self.requirements,
            'responsibilities': self.responsibilities,
            'benefits': self.benefits,
            'isActive': self.is_active,
            'killedAt': self.killed_at.isoformat() if self.killed_at else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'postedBy': {
                'id': poster.id,
                'fullName': poster.full_name,
                'username': poster.username,
            } if poster else None,
        }
        # present only when the queryset was annotated
        if hasattr(self, 'applicant_count'):
            data['applicantCount'] = self.applicant_count
        return data


APPLICATION_STATUS = (
    ('PENDING', 'Pending'),
    ('ACCEPTED', 'Accepted'),
    ('REJECTED', 'Rejected'),
)


def application_resume_upload_path(instance, filename):
    return os.path.join('applications', str(instance.applicant_id), filename)


class Application(models.Model):
    applicant = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='applications')
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='applications')
    uploaded_resume = models.FileField(upload_to=application_resume_upload_path, null=True, blank=True)
    resume_url = models.CharField(max_length=500, blank=True)
    cover_letter = models.TextField(blank=True)
    status = models.CharField(max_length=16, choices=APPLICATION_STATUS, default='PENDING')
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(fields=['job', 'applicant'], name='unique_application_per_job'),
        ]

    def __str__(self):
        return f"{self.applicant.username} -> {self.job.title} ({self.status})"

    def resume_link(self):
        if self.uploaded_resume:
            return self.uploaded_resume.url
        return self.resume_url or ''

    def to_dict(self):
        user = self.applicant
        return {
            'id': self.id,
            'status': self.status,
            'resumeUrl': self.resume_link() or None,
            'coverLetter': self.cover_letter,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'job': self.job.to_dict(),
            'user': {
                'id': user.id,
                'fullName': user.full_name,
                'username': user.username,
                'email': user.email,
                'phone': user.phone,
            },
        }
