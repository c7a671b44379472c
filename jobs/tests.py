# jobs/tests.py
import json
import shutil
import tempfile
from datetime import timedelta
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.test import TestCase, Client, override_settings
from django.urls import reverse
from django.utils import timezone

from .filters import JobFilterCriteria
from .models import Application, Job, parse_salary_value
from .services import (
    JobFetchError,
    filter_jobs,
    filter_options,
    inactive_jobs,
    kill_job,
    list_jobs,
    restore_job,
    search_jobs,
    validate_job_data,
)

User = get_user_model()

BASE_TIME = timezone.now() - timedelta(days=30)


def make_job(title='Backend Developer', minutes=0, **kwargs):
    kwargs.setdefault('created_at', BASE_TIME + timedelta(minutes=minutes))
    return Job.objects.create(title=title, **kwargs)


class BrokenQuerySet:
    """Stands in for Job.objects when the database is down."""

    def __getattr__(self, name):
        return lambda *args, **kwargs: self

    def __getitem__(self, item):
        return self

    def __iter__(self):
        raise DatabaseError("store unavailable")

    def count(self):
        raise DatabaseError("store unavailable")


class JobModelTests(TestCase):
    def test_salary_value_parsed_on_save(self):
        self.assertEqual(make_job(salary='30,000 - 45,000 / month').salary_value, 30000)
        self.assertEqual(make_job(salary='55000').salary_value, 55000)
        self.assertIsNone(make_job(salary='Negotiable').salary_value)
        self.assertIsNone(parse_salary_value(''))

    def test_kill_and_restore(self):
        job = make_job()
        job.kill()
        job.refresh_from_db()
        self.assertFalse(job.is_active)
        self.assertIsNotNone(job.killed_at)

        job.restore()
        job.refresh_from_db()
        self.assertTrue(job.is_active)
        self.assertIsNone(job.killed_at)

    def test_to_dict_includes_annotated_count(self):
        job = make_job()
        self.assertNotIn('applicantCount', job.to_dict())
        annotated = list_jobs()[0]
        self.assertEqual(annotated.to_dict()['applicantCount'], 0)


class SearchServiceTests(TestCase):
    def setUp(self):
        # posting N is created N minutes after BASE_TIME, so newest first is 13..1
        self.jobs = [make_job(title=f'Posting {i}', minutes=i) for i in range(1, 14)]

    def titles(self, result):
        return [job.title for job in result.jobs]

    def test_thirteen_postings_over_three_pages(self):
        newest_first = [f'Posting {i}' for i in range(13, 0, -1)]
        criteria = JobFilterCriteria()

        page1 = search_jobs(criteria, page=1, limit=6)
        page2 = search_jobs(criteria, page=2, limit=6)
        page3 = search_jobs(criteria, page=3, limit=6)

        self.assertEqual(self.titles(page1), newest_first[0:6])
        self.assertEqual(self.titles(page2), newest_first[6:12])
        self.assertEqual(self.titles(page3), newest_first[12:])
        for page in (page1, page2, page3):
            self.assertEqual(page.total_count, 13)
            self.assertEqual(page.total_pages, 3)
        self.assertEqual(page3.current_page, 3)

    def test_default_page_size_is_six(self):
        result = search_jobs(JobFilterCriteria())
        self.assertEqual(len(result.jobs), 6)
        self.assertEqual(result.current_page, 1)

    def test_invalid_page_falls_back_to_first(self):
        result = search_jobs(JobFilterCriteria(), page='-4', limit='nonsense')
        self.assertEqual(result.current_page, 1)
        self.assertEqual(self.titles(result)[0], 'Posting 13')

    def test_page_past_the_end_is_empty(self):
        result = search_jobs(JobFilterCriteria(), page=9, limit=6)
        self.assertEqual(result.jobs, [])
        self.assertEqual(result.total_pages, 3)

    def test_ties_are_broken_by_id(self):
        Job.objects.all().delete()
        same = [make_job(title=f'Tie {i}', minutes=0) for i in range(5)]
        seen = []
        for page in (1, 2, 3):
            seen.extend(j.id for j in search_jobs(JobFilterCriteria(), page=page, limit=2).jobs)
        self.assertEqual(seen, sorted((j.id for j in same), reverse=True))

    def test_no_results_means_zero_pages(self):
        result = search_jobs(JobFilterCriteria(search_keyword='astronaut'))
        self.assertEqual(result.jobs, [])
        self.assertEqual(result.total_count, 0)
        self.assertEqual(result.total_pages, 0)
        self.assertEqual(result.current_page, 1)

    def test_count_uses_same_predicate_as_page(self):
        for job in self.jobs[:4]:
            job.kill()
        result = search_jobs(JobFilterCriteria(is_active=False), privileged=False, limit=100)
        self.assertEqual(result.total_count, 9)
        self.assertEqual(len(result.jobs), 9)
        self.assertTrue(all(job.is_active for job in result.jobs))

    def test_privileged_include_inactive_sees_both_states(self):
        for job in self.jobs[:4]:
            job.kill()
        result = search_jobs(JobFilterCriteria(include_inactive=True), privileged=True, limit=100)
        self.assertEqual(result.total_count, 13)
        self.assertEqual({job.is_active for job in result.jobs}, {True, False})

    def test_privileged_inactive_only(self):
        for job in self.jobs[:4]:
            job.kill()
        result = search_jobs(JobFilterCriteria(is_active=False), privileged=True, limit=100)
        self.assertEqual(result.total_count, 4)

    def test_explicit_data_source(self):
        only_two = Job.objects.filter(title__in=['Posting 1', 'Posting 2'])
        result = search_jobs(JobFilterCriteria(), jobs=only_two)
        self.assertEqual(self.titles(result), ['Posting 2', 'Posting 1'])

    def test_store_failure_is_raised_and_logged(self):
        with self.assertLogs('jobs.services', level='ERROR'):
            with self.assertRaises(JobFetchError):
                search_jobs(JobFilterCriteria(), jobs=BrokenQuerySet())


class FilterFieldTests(TestCase):
    def setUp(self):
        self.python = make_job(
            title='Senior Python Developer', department='Engineering', location='Bangkok',
            employment_type='FULL_TIME', salary='60,000', minutes=1,
        )
        self.data = make_job(
            title='Data Analyst', department='Data & Engineering', location='Chiang Mai',
            employment_type='CONTRACT', salary='35000', requirements='SQL, Django dashboards', minutes=2,
        )
        self.hr = make_job(
            title='HR Officer', department='People', location='Bangkok',
            employment_type='PART_TIME', salary='Negotiable', description='Recruit python people', minutes=3,
        )

    def ids(self, criteria, **kwargs):
        return {job.id for job in filter_jobs(criteria, **kwargs)}

    def test_keyword_is_case_insensitive_across_fields(self):
        self.assertEqual(self.ids(JobFilterCriteria(search_keyword='PYTHON')), {self.python.id, self.hr.id})
        self.assertEqual(self.ids(JobFilterCriteria(search_keyword='django')), {self.data.id})

    def test_department_and_location_are_substring_matches(self):
        self.assertEqual(self.ids(JobFilterCriteria(department='engineering')), {self.python.id, self.data.id})
        self.assertEqual(self.ids(JobFilterCriteria(location='bang')), {self.python.id, self.hr.id})

    def test_employment_type_is_exact(self):
        self.assertEqual(self.ids(JobFilterCriteria(employment_type='CONTRACT')), {self.data.id})
        self.assertEqual(self.ids(JobFilterCriteria(employment_type='CONTRAC')), set())

    def test_combined_filters(self):
        criteria = JobFilterCriteria(location='Bangkok', search_keyword='python', employment_type='FULL_TIME')
        self.assertEqual(self.ids(criteria), {self.python.id})

    @override_settings(JOBS_APPLY_SALARY_FILTER=True)
    def test_salary_range_applied(self):
        self.assertEqual(self.ids(JobFilterCriteria(salary_min=40000)), {self.python.id})
        self.assertEqual(self.ids(JobFilterCriteria(salary_max=40000)), {self.data.id})
        self.assertEqual(self.ids(JobFilterCriteria(salary_min=30000, salary_max=70000)), {self.python.id, self.data.id})

    @override_settings(JOBS_APPLY_SALARY_FILTER=False)
    def test_salary_range_ignored_when_disabled(self):
        self.assertEqual(self.ids(JobFilterCriteria(salary_min=40000)), {self.python.id, self.data.id, self.hr.id})


class ListingServiceTests(TestCase):
    def setUp(self):
        self.open_job = make_job(title='Open', department='Sales', location='Phuket', minutes=1)
        self.closed_job = make_job(title='Closed', department='Finance', location='Rayong', minutes=2)
        self.closed_job.kill()

    def test_list_jobs_active_only_unless_privileged_and_asked(self):
        self.assertEqual([j.title for j in list_jobs()], ['Open'])
        self.assertEqual([j.title for j in list_jobs(privileged=True)], ['Open'])
        self.assertEqual([j.title for j in list_jobs(include_inactive=True)], ['Open'])
        self.assertEqual({j.title for j in list_jobs(privileged=True, include_inactive=True)}, {'Open', 'Closed'})

    def test_inactive_jobs(self):
        self.assertEqual([j.title for j in inactive_jobs()], ['Closed'])

    def test_filter_options_use_active_postings(self):
        options = filter_options()
        self.assertEqual(options['departments'], ['Sales'])
        self.assertEqual(options['locations'], ['Phuket'])
        self.assertIn({'value': 'INTERNSHIP', 'label': 'Internship'}, options['employmentTypes'])

    def test_listings_degrade_to_empty_on_store_failure(self):
        broken = BrokenQuerySet()
        with self.assertLogs('jobs.services', level='ERROR'):
            self.assertEqual(list_jobs(jobs=broken), [])
            self.assertEqual(filter_jobs(JobFilterCriteria(), jobs=broken), [])
            self.assertEqual(inactive_jobs(jobs=broken), [])
            self.assertEqual(filter_options(jobs=broken)['departments'], [])

    def test_kill_and_restore_by_id(self):
        self.assertFalse(kill_job(self.open_job.id).is_active)
        self.assertTrue(restore_job(self.closed_job.id).is_active)
        with self.assertRaises(Job.DoesNotExist):
            kill_job(999999)

    def test_lifecycle_changes_are_logged_with_actor(self):
        with self.assertLogs('jobs.services', level='INFO') as logs:
            kill_job(self.open_job.id, actor='hr')
            restore_job(self.open_job.id)
        self.assertIn(f"Job {self.open_job.id} killed by hr", logs.output[0])
        self.assertIn(f"Job {self.open_job.id} restored by system", logs.output[1])

    def test_validate_job_data(self):
        self.assertEqual(validate_job_data({'title': 'Chef'}), (True, None))
        ok, error = validate_job_data({'title': '  '})
        self.assertFalse(ok)
        self.assertTrue(error)


class UsersMixin:
    def make_users(self):
        self.applicant = User.objects.create_user(username='applicant', password='pass', email='a@example.com')
        self.hr_user = User.objects.create_user(username='hr', password='pass', role=User.ROLE_HR)
        self.admin_user = User.objects.create_user(username='boss', password='pass', role=User.ROLE_ADMIN)


# -------------------------
# HTML pages
# -------------------------
class JobPageTests(UsersMixin, TestCase):
    def setUp(self):
        self.make_users()
        self.client = Client()
        self.active = make_job(title='Active role', minutes=1)
        self.closed = make_job(title='Closed role', minutes=2)
        self.closed.kill()

    def test_job_list_hides_closed_postings_from_applicants(self):
        resp = self.client.get(reverse('job_list'), {'isActive': 'false', 'includeInactive': 'true'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([j.title for j in resp.context['result'].jobs], ['Active role'])

    def test_job_list_privileged_include_inactive(self):
        self.client.login(username='hr', password='pass')
        resp = self.client.get(reverse('job_list'), {'includeInactive': 'true'})
        self.assertEqual({j.title for j in resp.context['result'].jobs}, {'Active role', 'Closed role'})

    def test_job_list_renders_page_labels(self):
        for i in range(20):
            make_job(title=f'Bulk {i}', minutes=10 + i)
        resp = self.client.get(reverse('job_list'), {'page': '2'})
        self.assertEqual(resp.context['result'].total_pages, 4)
        self.assertContains(resp, 'page=3')

    def test_job_list_store_failure_is_500(self):
        with mock.patch('jobs.views.search_jobs', side_effect=JobFetchError('boom')):
            resp = self.client.get(reverse('job_list'))
        self.assertEqual(resp.status_code, 500)
        self.assertNotContains(resp, 'boom', status_code=500)

    def test_closed_job_detail_is_404_for_applicants(self):
        self.assertEqual(self.client.get(reverse('job_detail', args=[self.closed.id])).status_code, 404)
        self.client.login(username='hr', password='pass')
        self.assertEqual(self.client.get(reverse('job_detail', args=[self.closed.id])).status_code, 200)

    def test_hr_pages_require_privilege(self):
        resp = self.client.get(reverse('job_create'))
        self.assertEqual(resp.status_code, 302)
        self.client.login(username='applicant', password='pass')
        self.assertEqual(self.client.get(reverse('job_create')).status_code, 403)
        self.assertEqual(self.client.post(reverse('job_kill', args=[self.active.id])).status_code, 403)

    def test_create_edit_delete(self):
        self.client.login(username='hr', password='pass')
        resp = self.client.post(reverse('job_create'), {
            'title': 'QA Engineer', 'department': 'Engineering', 'location': 'Remote',
            'salary': '40,000', 'employment_type': 'FULL_TIME',
        })
        job = Job.objects.get(title='QA Engineer')
        self.assertRedirects(resp, reverse('job_detail', args=[job.id]))
        self.assertEqual(job.posted_by, self.hr_user)
        self.assertEqual(job.salary_value, 40000)

        self.client.post(reverse('job_edit', args=[job.id]), {'title': 'QA Lead', 'employment_type': 'CONTRACT'})
        job.refresh_from_db()
        self.assertEqual(job.title, 'QA Lead')

        self.client.post(reverse('job_delete', args=[job.id]))
        self.assertFalse(Job.objects.filter(id=job.id).exists())

    def test_create_requires_title(self):
        self.client.login(username='hr', password='pass')
        resp = self.client.post(reverse('job_create'), {'title': '   ', 'employment_type': 'FULL_TIME'})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.context['form'].errors)

    def test_kill_and_restore_pages(self):
        self.client.login(username='boss', password='pass')
        self.client.post(reverse('job_kill', args=[self.active.id]))
        self.active.refresh_from_db()
        self.assertFalse(self.active.is_active)

        resp = self.client.get(reverse('inactive_job_list'))
        self.assertEqual({j.title for j in resp.context['jobs']}, {'Active role', 'Closed role'})

        self.client.post(reverse('job_restore', args=[self.closed.id]))
        self.closed.refresh_from_db()
        self.assertTrue(self.closed.is_active)
        self.assertIsNone(self.closed.killed_at)

    def test_kill_requires_post(self):
        self.client.login(username='hr', password='pass')
        self.assertEqual(self.client.get(reverse('job_kill', args=[self.active.id])).status_code, 405)

    def test_kill_and_restore_unknown_posting(self):
        self.client.login(username='hr', password='pass')
        self.assertEqual(self.client.post(reverse('job_kill', args=[999999])).status_code, 404)
        self.assertEqual(self.client.post(reverse('job_restore', args=[999999])).status_code, 404)

    def test_job_list_search_form_keeps_values(self):
        resp = self.client.get(reverse('job_list'), {'search': 'role', 'salaryMin': '100'})
        self.assertTrue(resp.context['form'].is_valid())
        self.assertContains(resp, 'value="role"')
        self.assertContains(resp, 'value="100"')

    def test_job_list_search_form_errors(self):
        resp = self.client.get(reverse('job_list'), {'salaryMin': '50000', 'salaryMax': '100'})
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, 'Minimum salary cannot be greater than maximum salary.')

        resp = self.client.get(reverse('job_list'), {'salaryMin': 'lots'})
        self.assertEqual(resp.status_code, 200)
        self.assertIn('salaryMin', resp.context['form'].errors)
        # the unparseable bound is dropped, so the search still runs
        self.assertEqual([j.title for j in resp.context['result'].jobs], ['Active role'])


class ApplyPageTests(UsersMixin, TestCase):
    def setUp(self):
        self.media = tempfile.mkdtemp()
        self.override = override_settings(MEDIA_ROOT=self.media)
        self.override.enable()
        self.make_users()
        self.client = Client()
        self.client.login(username='applicant', password='pass')
        self.job = make_job(title='Designer')

    def tearDown(self):
        self.override.disable()
        shutil.rmtree(self.media, ignore_errors=True)

    def test_apply_with_resume(self):
        resume = SimpleUploadedFile('cv.pdf', b'%PDF-1.4 resume', content_type='application/pdf')
        resp = self.client.post(reverse('job_apply', args=[self.job.id]), {'uploaded_resume': resume, 'cover_letter': 'Hi'})
        self.assertRedirects(resp, reverse('my_applications'))
        app = Application.objects.get(job=self.job, applicant=self.applicant)
        self.assertEqual(app.status, 'PENDING')
        self.assertTrue(app.uploaded_resume.name.endswith('.pdf'))

    def test_rejects_other_file_types(self):
        resume = SimpleUploadedFile('cv.exe', b'MZ', content_type='application/octet-stream')
        resp = self.client.post(reverse('job_apply', args=[self.job.id]), {'uploaded_resume': resume})
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(Application.objects.exists())

    def test_cannot_apply_twice(self):
        self.client.post(reverse('job_apply', args=[self.job.id]), {})
        self.client.post(reverse('job_apply', args=[self.job.id]), {})
        self.assertEqual(Application.objects.filter(job=self.job).count(), 1)

    def test_cannot_apply_to_closed_job(self):
        self.job.kill()
        resp = self.client.post(reverse('job_apply', args=[self.job.id]), {})
        self.assertEqual(resp.status_code, 404)

    def test_my_applications(self):
        Application.objects.create(applicant=self.applicant, job=self.job)
        resp = self.client.get(reverse('my_applications'))
        self.assertContains(resp, 'Designer')

    def test_hr_updates_status(self):
        app = Application.objects.create(applicant=self.applicant, job=self.job)
        self.client.login(username='hr', password='pass')
        self.client.post(reverse('hr_application_status', args=[app.id]), {'status': 'ACCEPTED'})
        app.refresh_from_db()
        self.assertEqual(app.status, 'ACCEPTED')
        resp = self.client.get(reverse('hr_applications'), {'status': 'ACCEPTED'})
        self.assertEqual(list(resp.context['applications']), [app])


# -------------------------
# JSON API
# -------------------------
class JobApiTests(UsersMixin, TestCase):
    def setUp(self):
        self.make_users()
        self.client = Client()
        self.url = reverse('api_job_collection')

    def test_paginated_response_shape(self):
        for i in range(1, 14):
            make_job(title=f'Posting {i}', minutes=i)
        data = self.client.get(self.url, {'page': 3, 'limit': 6}).json()
        self.assertEqual(set(data), {'jobs', 'totalCount', 'totalPages', 'currentPage'})
        self.assertEqual(data['totalCount'], 13)
        self.assertEqual(data['totalPages'], 3)
        self.assertEqual(data['currentPage'], 3)
        self.assertEqual([j['title'] for j in data['jobs']], ['Posting 1'])

    def test_empty_result(self):
        data = self.client.get(self.url).json()
        self.assertEqual(data, {'jobs': [], 'totalCount': 0, 'totalPages': 0, 'currentPage': 1})

    def test_filters_from_query_string(self):
        make_job(title='Python Dev', location='Bangkok', employment_type='FULL_TIME')
        make_job(title='Java Dev', location='Bangkok', employment_type='CONTRACT')
        data = self.client.get(self.url, {'search': 'python', 'location': 'bangkok'}).json()
        self.assertEqual([j['title'] for j in data['jobs']], ['Python Dev'])
        data = self.client.get(self.url, {'employmentType': 'CONTRACT'}).json()
        self.assertEqual([j['title'] for j in data['jobs']], ['Java Dev'])

    def test_active_state_rules(self):
        make_job(title='Open', minutes=1)
        make_job(title='Closed', minutes=2).kill()

        data = self.client.get(self.url, {'isActive': 'false'}).json()
        self.assertEqual([j['title'] for j in data['jobs']], ['Open'])

        self.client.login(username='applicant', password='pass')
        data = self.client.get(self.url, {'includeInactive': 'true'}).json()
        self.assertEqual([j['title'] for j in data['jobs']], ['Open'])

        self.client.login(username='hr', password='pass')
        data = self.client.get(self.url, {'includeInactive': 'true'}).json()
        self.assertEqual({j['title'] for j in data['jobs']}, {'Open', 'Closed'})
        data = self.client.get(self.url, {'isActive': 'false'}).json()
        self.assertEqual([j['title'] for j in data['jobs']], ['Closed'])

    def test_search_failure_returns_generic_error(self):
        with mock.patch('jobs.api.search_jobs', side_effect=JobFetchError('db password wrong')):
            resp = self.client.get(self.url)
        self.assertEqual(resp.status_code, 500)
        self.assertIn('error', resp.json())
        self.assertNotIn('password', resp.json()['error'])

    def test_create_job_permissions(self):
        body = json.dumps({'title': 'Accountant', 'department': 'Finance'})
        self.assertEqual(self.client.post(self.url, body, content_type='application/json').status_code, 401)

        self.client.login(username='applicant', password='pass')
        self.assertEqual(self.client.post(self.url, body, content_type='application/json').status_code, 403)

        self.client.login(username='hr', password='pass')
        resp = self.client.post(self.url, body, content_type='application/json')
        self.assertEqual(resp.status_code, 201)
        job = resp.json()['job']
        self.assertEqual(job['title'], 'Accountant')
        self.assertEqual(job['employmentType'], 'FULL_TIME')
        self.assertEqual(job['postedBy']['username'], 'hr')

    def test_create_job_requires_title(self):
        self.client.login(username='hr', password='pass')
        resp = self.client.post(self.url, json.dumps({'department': 'Finance'}), content_type='application/json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('error', resp.json())

    def test_detail_update_kill_restore_delete(self):
        job = make_job(title='Driver')
        item = reverse('api_job_item', args=[job.id])

        self.assertEqual(self.client.get(item).json()['job']['title'], 'Driver')
        self.assertEqual(self.client.get(reverse('api_job_item', args=[999999])).status_code, 404)

        self.assertEqual(
            self.client.patch(item, json.dumps({'action': 'kill'}), content_type='application/json').status_code,
            401,
        )

        self.client.login(username='boss', password='pass')
        resp = self.client.put(item, json.dumps({'title': 'Senior Driver', 'salary': '25,000'}),
                               content_type='application/json')
        self.assertEqual(resp.status_code, 200)
        job.refresh_from_db()
        self.assertEqual(job.title, 'Senior Driver')
        self.assertEqual(job.salary_value, 25000)

        resp = self.client.patch(item, json.dumps({'action': 'kill'}), content_type='application/json')
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()['job']['isActive'])
        self.assertIsNotNone(resp.json()['job']['killedAt'])

        resp = self.client.patch(item, json.dumps({'action': 'restore'}), content_type='application/json')
        self.assertTrue(resp.json()['job']['isActive'])
        self.assertIsNone(resp.json()['job']['killedAt'])

        resp = self.client.patch(item, json.dumps({'action': 'explode'}), content_type='application/json')
        self.assertEqual(resp.status_code, 400)

        self.assertEqual(self.client.delete(item).status_code, 200)
        self.assertFalse(Job.objects.filter(id=job.id).exists())
        self.assertEqual(self.client.delete(item).status_code, 404)

    def test_closed_job_hidden_from_applicants(self):
        job = make_job(title='Gone')
        job.kill()
        self.assertEqual(self.client.get(reverse('api_job_item', args=[job.id])).status_code, 404)

    def test_filter_options(self):
        make_job(department='Sales', location='Pattaya')
        data = self.client.get(reverse('api_job_filter_options')).json()
        self.assertEqual(data['departments'], ['Sales'])
        self.assertEqual(data['locations'], ['Pattaya'])
        self.assertEqual(len(data['employmentTypes']), 4)


class ApplicationApiTests(UsersMixin, TestCase):
    def setUp(self):
        self.make_users()
        self.other = User.objects.create_user(username='other', password='pass')
        self.client = Client()
        self.url = reverse('api_application_collection')
        self.job = make_job(title='Barista')

    def post(self, payload):
        return self.client.post(self.url, json.dumps(payload), content_type='application/json')

    def test_requires_login(self):
        self.assertEqual(self.client.get(self.url).status_code, 401)
        self.assertEqual(self.post({'jobId': self.job.id}).status_code, 401)

    def test_apply_and_duplicate(self):
        self.client.login(username='applicant', password='pass')
        self.assertEqual(self.post({}).status_code, 400)
        self.assertEqual(self.post({'jobId': 999999}).status_code, 404)

        resp = self.post({'jobId': self.job.id, 'resumeUrl': '/media/resumes/1/cv.pdf'})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(self.post({'jobId': self.job.id}).status_code, 400)
        app = Application.objects.get()
        self.assertEqual(app.resume_url, '/media/resumes/1/cv.pdf')

    def test_cannot_apply_to_closed_job(self):
        self.job.kill()
        self.client.login(username='applicant', password='pass')
        self.assertEqual(self.post({'jobId': self.job.id}).status_code, 404)

    def test_listing_scope(self):
        Application.objects.create(applicant=self.applicant, job=self.job)
        Application.objects.create(applicant=self.other, job=self.job)

        self.client.login(username='applicant', password='pass')
        mine = self.client.get(self.url).json()
        self.assertEqual([a['user']['username'] for a in mine], ['applicant'])

        self.client.login(username='hr', password='pass')
        self.assertEqual(len(self.client.get(self.url).json()), 2)

    def test_status_update(self):
        app = Application.objects.create(applicant=self.applicant, job=self.job)

        def patch(payload):
            return self.client.patch(self.url, json.dumps(payload), content_type='application/json')

        self.client.login(username='applicant', password='pass')
        self.assertEqual(patch({'applicationId': app.id, 'status': 'ACCEPTED'}).status_code, 403)

        self.client.login(username='hr', password='pass')
        self.assertEqual(patch({'applicationId': app.id}).status_code, 400)
        self.assertEqual(patch({'applicationId': app.id, 'status': 'HIRED'}).status_code, 400)
        resp = patch({'applicationId': app.id, 'status': 'REJECTED'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['application']['status'], 'REJECTED')

    def test_apply_with_malformed_job_id(self):
        self.client.login(username='applicant', password='pass')
        for bad in ({'x': 1}, [self.job.id], 'abc'):
            resp = self.post({'jobId': bad})
            self.assertEqual(resp.status_code, 404, bad)
            self.assertIn('error', resp.json())
        self.assertFalse(Application.objects.exists())

    def test_status_update_with_malformed_values(self):
        app = Application.objects.create(applicant=self.applicant, job=self.job)
        self.client.login(username='hr', password='pass')

        def patch(payload):
            return self.client.patch(self.url, json.dumps(payload), content_type='application/json')

        resp = patch({'applicationId': app.id, 'status': ['ACCEPTED']})
        self.assertEqual(resp.status_code, 400)
        self.assertIn('error', resp.json())
        self.assertEqual(patch({'applicationId': app.id, 'status': {'v': 'ACCEPTED'}}).status_code, 400)

        for bad in ({'x': 1}, [app.id], 'abc'):
            resp = patch({'applicationId': bad, 'status': 'ACCEPTED'})
            self.assertEqual(resp.status_code, 404, bad)
            self.assertIn('error', resp.json())
        app.refresh_from_db()
        self.assertEqual(app.status, 'PENDING')


class ResumeUploadApiTests(UsersMixin, TestCase):
    def setUp(self):
        self.media = tempfile.mkdtemp()
        self.override = override_settings(MEDIA_ROOT=self.media)
        self.override.enable()
        self.make_users()
        self.client = Client()
        self.url = reverse('api_resume_upload')

    def tearDown(self):
        self.override.disable()
        shutil.rmtree(self.media, ignore_errors=True)

    def test_upload(self):
        self.assertEqual(self.client.post(self.url).status_code, 401)
        self.client.login(username='applicant', password='pass')
        resp = self.client.post(self.url, {'file': SimpleUploadedFile('cv.docx', b'PK docx')})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['filename'], 'cv.docx')
        self.assertIn('/media/resumes/', resp.json()['url'])

    def test_upload_rejects_bad_files(self):
        self.client.login(username='applicant', password='pass')
        self.assertEqual(self.client.post(self.url, {}).status_code, 400)
        resp = self.client.post(self.url, {'file': SimpleUploadedFile('cv.txt', b'plain')})
        self.assertEqual(resp.status_code, 400)

    @override_settings(RESUME_MAX_UPLOAD_MB=0)
    def test_upload_size_limit(self):
        self.client.login(username='applicant', password='pass')
        resp = self.client.post(self.url, {'file': SimpleUploadedFile('cv.pdf', b'%PDF big')})
        self.assertEqual(resp.status_code, 400)
