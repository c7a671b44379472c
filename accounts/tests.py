# accounts/tests.py
from unittest import mock

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import TestCase, Client
from django.urls import reverse

from jobs.models import Application, Job
from .decorators import is_privileged

User = get_user_model()


class RoleTests(TestCase):
    def test_privilege_by_role(self):
        applicant = User.objects.create_user(username='u', password='pass')
        hr = User.objects.create_user(username='h', password='pass', role=User.ROLE_HR)
        admin = User.objects.create_user(username='a', password='pass', role=User.ROLE_ADMIN)
        root = User.objects.create_superuser(username='root', password='pass', email='root@example.com')

        self.assertEqual(applicant.role, User.ROLE_USER)
        self.assertFalse(is_privileged(applicant))
        self.assertTrue(is_privileged(hr))
        self.assertTrue(is_privileged(admin))
        self.assertTrue(is_privileged(root))
        self.assertFalse(is_privileged(AnonymousUser()))

    def test_display_name(self):
        user = User.objects.create_user(username='somchai', password='pass')
        self.assertEqual(user.display_name(), 'somchai')
        user.full_name = 'Somchai J.'
        self.assertEqual(user.display_name(), 'Somchai J.')


class SignupTests(TestCase):
    def signup(self, role):
        return self.client.post(reverse('signup'), {
            'username': f'new_{role}',
            'email': f'{role}@example.com',
            'full_name': 'New Person',
            'phone': '0812345678',
            'role': role,
            'password1': 'Wh1te-Orchid-42',
            'password2': 'Wh1te-Orchid-42',
        })

    def test_signup_logs_in_and_redirects(self):
        resp = self.signup('user')
        self.assertRedirects(resp, reverse('dashboard-redirect'), target_status_code=302)
        user = User.objects.get(username='new_user')
        self.assertEqual(user.role, User.ROLE_USER)
        self.assertEqual(int(self.client.session['_auth_user_id']), user.pk)

    def test_signup_as_hr(self):
        self.signup('hr')
        self.assertTrue(User.objects.get(username='new_hr').is_privileged())

    def test_cannot_self_signup_as_admin(self):
        resp = self.signup('admin')
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(User.objects.filter(username='new_admin').exists())


class DashboardTests(TestCase):
    def setUp(self):
        self.applicant = User.objects.create_user(username='applicant', password='pass')
        self.hr = User.objects.create_user(username='hr', password='pass', role=User.ROLE_HR)
        self.client = Client()
        self.open_job = Job.objects.create(title='Cook')
        self.other_job = Job.objects.create(title='Waiter')
        closed = Job.objects.create(title='Cleaner')
        closed.kill()
        Application.objects.create(applicant=self.applicant, job=self.open_job, status='ACCEPTED')
        Application.objects.create(applicant=self.applicant, job=self.other_job)

    def test_redirect_by_role(self):
        self.client.login(username='applicant', password='pass')
        self.assertRedirects(self.client.get(reverse('dashboard-redirect')), reverse('user_dashboard'))
        self.client.login(username='hr', password='pass')
        self.assertRedirects(self.client.get(reverse('dashboard-redirect')), reverse('hr_dashboard'))

    def test_user_dashboard_counts(self):
        self.client.login(username='applicant', password='pass')
        resp = self.client.get(reverse('user_dashboard'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['active_job_count'], 2)
        self.assertEqual(resp.context['stats'], {'total': 2, 'pending': 1, 'accepted': 1, 'rejected': 0})
        self.assertEqual(len(resp.context['recent_applications']), 2)

    def test_hr_dashboard(self):
        self.client.login(username='hr', password='pass')
        resp = self.client.get(reverse('hr_dashboard'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['job_stats'], {'total': 3, 'active': 2})
        self.assertEqual(resp.context['app_stats'], {'total': 2, 'pending': 1, 'accepted': 1})
        counts = {job.title: job.applicant_count for job in resp.context['jobs']}
        self.assertEqual(counts, {'Cook': 1, 'Waiter': 1, 'Cleaner': 0})

    def test_hr_dashboard_search(self):
        self.client.login(username='hr', password='pass')
        resp = self.client.get(reverse('hr_dashboard'), {'search': 'clean'})
        self.assertEqual([job.title for job in resp.context['jobs']], ['Cleaner'])
        self.assertEqual(resp.context['search'], 'clean')

    def test_hr_dashboard_survives_store_failure(self):
        self.client.login(username='hr', password='pass')
        with mock.patch('jobs.services._with_counts', side_effect=DatabaseError('down')), \
                self.assertLogs('jobs.services', level='ERROR'):
            resp = self.client.get(reverse('hr_dashboard'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context['jobs'], [])

    def test_hr_dashboard_forbidden_for_applicants(self):
        self.client.login(username='applicant', password='pass')
        self.assertEqual(self.client.get(reverse('hr_dashboard')).status_code, 403)

    def test_dashboards_require_login(self):
        resp = self.client.get(reverse('user_dashboard'))
        self.assertEqual(resp.status_code, 302)
        self.assertIn(reverse('login'), resp['Location'])
