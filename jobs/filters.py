# jobs/filters.py
"""
Job search criteria and the predicate builder behind the job board search.

The builder starts from an empty constraint mapping (name -> ``Q``) and folds
each optional criteria field into it with a pure step function. Steps never
mutate the mapping they receive, so every rule (including the privileged
"include inactive" rule, which removes the active-state constraint rather
than flipping it) can be checked on its own.
"""
from collections import namedtuple
from dataclasses import dataclass
from functools import reduce
from typing import Optional

from django.conf import settings
from django.db.models import Q

DEFAULT_PAGE = 1

# query-string name -> criteria attribute
QUERY_PARAM_NAMES = {
    'search': 'search_keyword',
    'department': 'department',
    'location': 'location',
    'employmentType': 'employment_type',
    'salaryMin': 'salary_min',
    'salaryMax': 'salary_max',
    'isActive': 'is_active',
    'includeInactive': 'include_inactive',
}


def _clean_text(value):
    # Absent and blank are the same thing: no constraint.
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _clean_int(value):
    if value is None or value == '':
        return None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class JobFilterCriteria:
    search_keyword: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    employment_type: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    is_active: bool = True
    include_inactive: bool = False

    def __post_init__(self):
        for name in ('search_keyword', 'department', 'location', 'employment_type'):
            object.__setattr__(self, name, _clean_text(getattr(self, name)))
        # an unset active state means active, same as a missing isActive param
        object.__setattr__(self, 'is_active', self.is_active is not False)

    @classmethod
    def from_query_params(cls, params):
        """
        Decode request query parameters (a QueryDict or plain dict).

        ``isActive`` is False only for the literal string "false"; anything
        else, including a missing value, means True. ``includeInactive`` is
        True only for "true". Unparseable salary bounds are dropped.
        """
        is_active_raw = params.get('isActive')
        return cls(
            search_keyword=params.get('search'),
            department=params.get('department'),
            location=params.get('location'),
            employment_type=params.get('employmentType'),
            salary_min=_clean_int(params.get('salaryMin')),
            salary_max=_clean_int(params.get('salaryMax')),
            is_active=(str(is_active_raw).lower() != 'false') if is_active_raw is not None else True,
            include_inactive=str(params.get('includeInactive', '')).lower() == 'true',
        )

    def to_query_params(self):
        params = {}
        for param, attr in QUERY_PARAM_NAMES.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if attr == 'include_inactive':
                if value:
                    params[param] = 'true'
            elif isinstance(value, bool):
                params[param] = 'true' if value else 'false'
            else:
                params[param] = str(value)
        return params

    def has_active_filters(self):
        return any([
            self.search_keyword,
            self.department,
            self.location,
            self.employment_type,
            self.salary_min is not None,
            self.salary_max is not None,
            self.is_active is False,
        ])


# -------------------------
# Fold steps: (constraints, criteria) -> constraints
# -------------------------
def apply_keyword(constraints, criteria):
    kw = criteria.search_keyword
    if not kw:
        return constraints
    return {
        **constraints,
        'search': Q(title__icontains=kw) | Q(description__icontains=kw) | Q(requirements__icontains=kw),
    }


def apply_department(constraints, criteria):
    if not criteria.department:
        return constraints
    return {**constraints, 'department': Q(department__icontains=criteria.department)}


def apply_location(constraints, criteria):
    if not criteria.location:
        return constraints
    return {**constraints, 'location': Q(location__icontains=criteria.location)}


def apply_employment_type(constraints, criteria):
    if not criteria.employment_type:
        return constraints
    return {**constraints, 'employment_type': Q(employment_type=criteria.employment_type)}


def apply_salary_range(constraints, criteria, enabled=True):
    if not enabled:
        return constraints
    result = dict(constraints)
    if criteria.salary_min is not None:
        result['salary_min'] = Q(salary_value__gte=criteria.salary_min)
    if criteria.salary_max is not None:
        result['salary_max'] = Q(salary_value__lte=criteria.salary_max)
    return result


def apply_active_state(constraints, criteria, privileged=False):
    """
    Non-privileged callers always get ``is_active=True`` whatever they asked for.
    Privileged callers get their own value, or no constraint at all when they
    asked to include inactive postings.
    """
    if not privileged:
        return {**constraints, 'is_active': Q(is_active=True)}
    if criteria.include_inactive:
        result = dict(constraints)
        result.pop('is_active', None)
        return result
    wanted = True if criteria.is_active is None else criteria.is_active
    return {**constraints, 'is_active': Q(is_active=wanted)}


def salary_filter_enabled():
    return getattr(settings, 'JOBS_APPLY_SALARY_FILTER', True)


def build_constraints(criteria, privileged=False, apply_salary=None):
    if apply_salary is None:
        apply_salary = salary_filter_enabled()
    steps = (
        apply_keyword,
        apply_department,
        apply_location,
        apply_employment_type,
        lambda c, crit: apply_salary_range(c, crit, enabled=apply_salary),
        lambda c, crit: apply_active_state(c, crit, privileged=privileged),
    )
    return reduce(lambda acc, step: step(acc, criteria), steps, {})


def as_q(constraints):
    """AND every constraint together. No constraints -> match everything."""
    return reduce(lambda acc, q: acc & q, constraints.values(), Q())


# -------------------------
# Pagination window
# -------------------------
PageWindow = namedtuple('PageWindow', ['page', 'limit', 'offset'])


def coerce_positive_int(value, default):
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def default_page_size():
    return getattr(settings, 'JOBS_PAGE_SIZE', 6)


def page_window(page=None, limit=None):
    page = coerce_positive_int(page, DEFAULT_PAGE)
    limit = coerce_positive_int(limit, default_page_size())
    max_limit = getattr(settings, 'JOBS_MAX_PAGE_SIZE', None)
    if max_limit:
        limit = min(limit, max_limit)
    return PageWindow(page=page, limit=limit, offset=(page - 1) * limit)
