# jobs/forms.py
import os

from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError

from .models import EMPLOYMENT_TYPES, APPLICATION_STATUS, Job


class JobForm(forms.ModelForm):
    class Meta:
        model = Job
        fields = [
            'title', 'department', 'location', 'salary', 'employment_type',
            'description', 'requirements', 'responsibilities', 'benefits',
        ]

    def clean_title(self):
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise ValidationError("Job title is required.")
        return title


class JobSearchForm(forms.Form):
    """
    Filter form shown above the job list. Field names match the JSON API
    query parameters so the same GET string drives both.
    """
    search = forms.CharField(required=False, widget=forms.TextInput(attrs={'placeholder': 'Keyword'}))
    department = forms.CharField(required=False)
    location = forms.CharField(required=False)
    employmentType = forms.ChoiceField(required=False, choices=(('', 'Any type'),) + EMPLOYMENT_TYPES)
    salaryMin = forms.IntegerField(required=False, min_value=0, widget=forms.NumberInput(attrs={'placeholder': 'Min salary'}))
    salaryMax = forms.IntegerField(required=False, min_value=0, widget=forms.NumberInput(attrs={'placeholder': 'Max salary'}))

    def __init__(self, *args, options=None, **kwargs):
        super().__init__(*args, **kwargs)
        # department/location stay free text (substring match) but render as pickers
        if options:
            self.fields['department'].widget = forms.Select(
                choices=[('', 'All departments')] + [(d, d) for d in options.get('departments', [])]
            )
            self.fields['location'].widget = forms.Select(
                choices=[('', 'All locations')] + [(loc, loc) for loc in options.get('locations', [])]
            )

    def clean(self):
        cleaned = super().clean()
        low, high = cleaned.get('salaryMin'), cleaned.get('salaryMax')
        if low is not None and high is not None and low > high:
            raise ValidationError("Minimum salary cannot be greater than maximum salary.")
        return cleaned


def validate_resume_file(f):
    if not f:
        return f
    name = f.name.lower()
    allowed = getattr(settings, 'RESUME_ALLOWED_EXTENSIONS', ('.pdf', '.docx'))
    if os.path.splitext(name)[1] not in allowed:
        raise ValidationError("Only PDF and DOCX files are allowed.")
    max_mb = getattr(settings, 'RESUME_MAX_UPLOAD_MB', 5)
    if f.size > max_mb * 1024 * 1024:
        raise ValidationError(f"File size must be <= {max_mb} MB.")
    return f


class ApplyForm(forms.Form):
    uploaded_resume = forms.FileField(required=False)
    cover_letter = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 4}), max_length=2000)

    def clean_uploaded_resume(self):
        return validate_resume_file(self.cleaned_data.get('uploaded_resume'))


class ResumeUploadForm(forms.Form):
    file = forms.FileField()

    def clean_file(self):
        return validate_resume_file(self.cleaned_data.get('file'))


class ApplicationStatusForm(forms.Form):
    status = forms.ChoiceField(choices=APPLICATION_STATUS)
