"""
WSGI entry point for deployment (Gunicorn).
Run: gunicorn wsgi:server
"""
from sanavi_dashboard.app import server  # noqa: F401
