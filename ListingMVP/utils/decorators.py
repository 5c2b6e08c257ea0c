from functools import wraps

from flask_login import current_user

from ListingMVP.exceptions import AuthRequiredError


def agent_required(fn):
    """Reject the request with AuthRequiredError unless a session is logged in.

    Runs before the view body, so unauthenticated calls never reach the
    store or the text generator.
    """
    @wraps(fn)
    def decorated_view(*args, **kwargs):
        if not current_user.is_authenticated:
            raise AuthRequiredError("Unauthorized")
        return fn(*args, **kwargs)
    return decorated_view
