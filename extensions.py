"""
Flask extension instances, created unbound and initialised in create_app.

Kept in their own module so blueprints can import them without importing
the application.
"""
from flask_wtf.csrf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# CSRF protection for form posts; the JSON API blueprint is exempted
csrf = CSRFProtect()

# Per-client limits; API routes add their own limit from API_RATE_LIMIT
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per day", "100 per hour"],
    headers_enabled=True,
)
