from functools import wraps

from django.core.exceptions import PermissionDenied
from django.http import JsonResponse
from django.shortcuts import redirect
from django.utils.translation import gettext as _


def is_privileged(user):
    """True for authenticated admin/HR users. Anonymous users are never privileged."""
    if not getattr(user, 'is_authenticated', False):
        return False
    check = getattr(user, 'is_privileged', None)
    return bool(check and check())


def privileged_required(view_func):
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect('login')
        if not is_privileged(request.user):
            raise PermissionDenied("HR access required.")
        return view_func(request, *args, **kwargs)
    return _wrapped


# JSON variants: the API answers with {"error": ...} instead of redirecting.
def api_login_required(view_func):
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'error': _('Please sign in first.')}, status=401)
        return view_func(request, *args, **kwargs)
    return _wrapped


def api_privileged_required(view_func):
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'error': _('Please sign in first.')}, status=401)
        if not is_privileged(request.user):
            return JsonResponse({'error': _('Insufficient permissions.')}, status=403)
        return view_func(request, *args, **kwargs)
    return _wrapped
