#!/usr/bin/env python3
# Procfile: `web: gunicorn wsgi:app`
from dotenv import load_dotenv

load_dotenv()

from flatdesk import create_app  # noqa: E402

app = create_app()
