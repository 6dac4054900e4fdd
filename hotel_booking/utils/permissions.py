from functools import wraps

from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from hotel_booking.utils.responses import api_error

ROLE_PERMISSIONS = {
    'customer': frozenset({
        'booking:create',
        'booking:list',
        'booking:cancel',
        'review:create',
    }),
    'owner': frozenset({
        'hotel:create',
        'room:create',
    }),
}

ROLES = tuple(ROLE_PERMISSIONS)


def has_permission(role, permission):
    return permission in ROLE_PERMISSIONS.get(role, frozenset())


def current_caller():
    """Return ``{'id', 'role', ...}`` for the verified JWT of this request."""
    claims = get_jwt()
    return {
        'id': get_jwt_identity(),
        'name': claims.get('name'),
        'email': claims.get('email'),
        'role': claims.get('role'),
        'phone': claims.get('phone')
    }


def permission_required(permission):
    """Require an authenticated caller whose role grants ``permission``.

    Missing or bad tokens are answered by the JWT loaders (UNAUTHORIZED);
    an authenticated caller without the capability gets FORBIDDEN.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            if not has_permission(get_jwt().get('role'), permission):
                return api_error('FORBIDDEN', 403)
            return fn(*args, **kwargs)
        return wrapper
    return decorator
