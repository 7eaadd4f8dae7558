"""WSGI entry point, e.g. ``gunicorn taskapi.wsgi:app``."""

import atexit

from taskapi import create_app


app = create_app()
atexit.register(app.extensions["task_store"].close)
