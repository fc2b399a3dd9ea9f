"""Gunicorn configuration for production.

Run with: gunicorn -c gunicorn.conf.py 'hijri_zakat:create_app()'
"""

# Server socket
bind = '0.0.0.0:8080'

# Calculations are CPU-bound and stateless; plain sync workers suffice
workers = 2
worker_class = 'sync'
timeout = 30
keepalive = 2

# Logging
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Process naming
proc_name = 'hijri-zakat'
