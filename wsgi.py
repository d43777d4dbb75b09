"""WSGI entry point for the Task Dashboard API."""

import os

from task_dashboard import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
