"""Gunicorn configuration for the accommodation console."""

import os

# Server socket
bind = os.environ.get('GUNICORN_BIND', '0.0.0.0:8000')

# SQLite allows one writer at a time: keep processes few, use threads for reads
workers = int(os.environ.get('GUNICORN_WORKERS', 2))
threads = int(os.environ.get('GUNICORN_THREADS', 4))
worker_class = 'gthread'

timeout = 30
graceful_timeout = 20
keepalive = 5

# Logging (same directory as the application log)
os.makedirs('logs', exist_ok=True)
accesslog = os.environ.get('GUNICORN_ACCESS_LOG', 'logs/gunicorn-access.log')
errorlog = os.environ.get('GUNICORN_ERROR_LOG', 'logs/gunicorn-error.log')
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'info')
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

proc_name = 'staff-accommodation'

# create_app() runs once in the master
preload_app = True

# Worker recycling
max_requests = 2000
max_requests_jitter = 100

# Request limits (JSON API only)
limit_request_line = 4094
limit_request_fields = 50
limit_request_field_size = 8190
