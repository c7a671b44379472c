from urllib.parse import urlencode

from django.db.models import Q
from django.http import QueryDict
from django.test import SimpleTestCase, override_settings

from jobs.filters import (
    JobFilterCriteria,
    apply_active_state,
    apply_keyword,
    apply_salary_range,
    as_q,
    build_constraints,
    page_window,
)

ACTIVE = Q(is_active=True)


class CriteriaTests(SimpleTestCase):
    def test_blank_strings_mean_no_constraint(self):
        self.assertEqual(JobFilterCriteria(department=''), JobFilterCriteria(department=None))
        self.assertIsNone(JobFilterCriteria(search_keyword='   ').search_keyword)
        criteria = JobFilterCriteria.from_query_params({'search': '', 'location': ' '})
        self.assertIsNone(criteria.search_keyword)
        self.assertIsNone(criteria.location)

    def test_text_values_are_trimmed(self):
        self.assertEqual(JobFilterCriteria(location='  Bangkok ').location, 'Bangkok')

    def test_is_active_decoding(self):
        self.assertFalse(JobFilterCriteria.from_query_params({'isActive': 'false'}).is_active)
        self.assertFalse(JobFilterCriteria.from_query_params({'isActive': 'FALSE'}).is_active)
        self.assertTrue(JobFilterCriteria.from_query_params({'isActive': 'true'}).is_active)
        self.assertTrue(JobFilterCriteria.from_query_params({'isActive': 'nope'}).is_active)
        self.assertTrue(JobFilterCriteria.from_query_params({}).is_active)

    def test_unset_active_state_means_active(self):
        self.assertIs(JobFilterCriteria(is_active=None).is_active, True)
        self.assertEqual(JobFilterCriteria(is_active=None), JobFilterCriteria())

    def test_include_inactive_only_for_true(self):
        self.assertTrue(JobFilterCriteria.from_query_params({'includeInactive': 'true'}).include_inactive)
        self.assertFalse(JobFilterCriteria.from_query_params({'includeInactive': '1'}).include_inactive)
        self.assertFalse(JobFilterCriteria.from_query_params({}).include_inactive)

    def test_bad_salary_bounds_are_dropped(self):
        criteria = JobFilterCriteria.from_query_params({'salaryMin': 'lots', 'salaryMax': '50000'})
        self.assertIsNone(criteria.salary_min)
        self.assertEqual(criteria.salary_max, 50000)

    def test_query_param_round_trip_per_field(self):
        samples = [
            JobFilterCriteria(search_keyword='python'),
            JobFilterCriteria(department='Engineering'),
            JobFilterCriteria(location='Chiang Mai'),
            JobFilterCriteria(employment_type='PART_TIME'),
            JobFilterCriteria(salary_min=30000),
            JobFilterCriteria(salary_max=90000),
            JobFilterCriteria(is_active=False),
            JobFilterCriteria(is_active=True),
            JobFilterCriteria(is_active=None),
            JobFilterCriteria(include_inactive=True),
            JobFilterCriteria(),
        ]
        for criteria in samples:
            params = criteria.to_query_params()
            self.assertEqual(JobFilterCriteria.from_query_params(params), criteria)
            # and through a real query string
            self.assertEqual(JobFilterCriteria.from_query_params(QueryDict(urlencode(params))), criteria)

    def test_has_active_filters(self):
        self.assertFalse(JobFilterCriteria().has_active_filters())
        self.assertTrue(JobFilterCriteria(location='Remote').has_active_filters())
        self.assertTrue(JobFilterCriteria(salary_min=0).has_active_filters())
        self.assertTrue(JobFilterCriteria(is_active=False).has_active_filters())


class ConstraintBuilderTests(SimpleTestCase):
    def test_empty_criteria_only_constrains_active(self):
        self.assertEqual(build_constraints(JobFilterCriteria()), {'is_active': ACTIVE})
        self.assertEqual(as_q(build_constraints(JobFilterCriteria())), ACTIVE)

    def test_non_privileged_cannot_ask_for_inactive(self):
        criteria = JobFilterCriteria.from_query_params({'isActive': 'false', 'includeInactive': 'true'})
        self.assertEqual(build_constraints(criteria, privileged=False), {'is_active': ACTIVE})

    def test_privileged_include_inactive_removes_constraint(self):
        criteria = JobFilterCriteria(include_inactive=True)
        self.assertNotIn('is_active', build_constraints(criteria, privileged=True))
        self.assertEqual(as_q(build_constraints(criteria, privileged=True)), Q())

    def test_privileged_gets_requested_state(self):
        self.assertEqual(
            build_constraints(JobFilterCriteria(is_active=False), privileged=True),
            {'is_active': Q(is_active=False)},
        )
        self.assertEqual(
            build_constraints(JobFilterCriteria(), privileged=True),
            {'is_active': ACTIVE},
        )

    def test_include_inactive_deletes_existing_constraint(self):
        start = {'is_active': ACTIVE}
        result = apply_active_state(start, JobFilterCriteria(include_inactive=True), privileged=True)
        self.assertEqual(result, {})
        self.assertEqual(start, {'is_active': ACTIVE})

    def test_keyword_matches_any_of_three_fields(self):
        constraints = apply_keyword({}, JobFilterCriteria(search_keyword='django'))
        expected = (
            Q(title__icontains='django')
            | Q(description__icontains='django')
            | Q(requirements__icontains='django')
        )
        self.assertEqual(constraints, {'search': expected})

    def test_steps_do_not_mutate_input(self):
        start = {}
        apply_keyword(start, JobFilterCriteria(search_keyword='x'))
        apply_salary_range(start, JobFilterCriteria(salary_min=1, salary_max=2))
        self.assertEqual(start, {})

    def test_every_field(self):
        criteria = JobFilterCriteria(
            search_keyword='data',
            department='Eng',
            location='BKK',
            employment_type='CONTRACT',
            salary_min=10,
            salary_max=20,
        )
        constraints = build_constraints(criteria, apply_salary=True)
        self.assertEqual(
            set(constraints),
            {'search', 'department', 'location', 'employment_type', 'salary_min', 'salary_max', 'is_active'},
        )
        self.assertEqual(constraints['department'], Q(department__icontains='Eng'))
        self.assertEqual(constraints['location'], Q(location__icontains='BKK'))
        self.assertEqual(constraints['employment_type'], Q(employment_type='CONTRACT'))
        self.assertEqual(constraints['salary_min'], Q(salary_value__gte=10))
        self.assertEqual(constraints['salary_max'], Q(salary_value__lte=20))

    def test_salary_range_can_be_switched_off(self):
        criteria = JobFilterCriteria(salary_min=10, salary_max=20)
        self.assertEqual(build_constraints(criteria, apply_salary=False), {'is_active': ACTIVE})

    @override_settings(JOBS_APPLY_SALARY_FILTER=False)
    def test_salary_range_follows_setting(self):
        criteria = JobFilterCriteria(salary_min=10)
        self.assertNotIn('salary_min', build_constraints(criteria))


@override_settings(JOBS_PAGE_SIZE=6, JOBS_MAX_PAGE_SIZE=100)
class PageWindowTests(SimpleTestCase):
    def test_defaults(self):
        self.assertEqual(page_window(), (1, 6, 0))

    def test_invalid_values_fall_back(self):
        self.assertEqual(page_window('abc', 'xyz'), (1, 6, 0))
        self.assertEqual(page_window(-3, 0), (1, 6, 0))
        self.assertEqual(page_window('', None), (1, 6, 0))

    def test_offsets(self):
        self.assertEqual(page_window('2', '10'), (2, 10, 10))
        self.assertEqual(page_window(3, 6).offset, 12)

    def test_limit_is_capped(self):
        self.assertEqual(page_window(1, 1000).limit, 100)
