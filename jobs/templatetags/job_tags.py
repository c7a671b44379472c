# jobs/templatetags/job_tags.py
from django import template

from jobs.pagination import ELLIPSIS, clamp_page, generate_page_labels

register = template.Library()


@register.simple_tag
def page_labels(current, total):
    """Labels for the pagination bar; empty when there is nothing to page through."""
    if not total or total < 1:
        return []
    return generate_page_labels(clamp_page(current, total), total)


@register.filter
def is_ellipsis(label):
    return label == ELLIPSIS
