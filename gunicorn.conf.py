import os

# Application
wsgi_app = 'api.app:create_app()'

# Server socket
bind = f"0.0.0.0:{os.environ.get('PORT', '5000')}"

# Worker processes
workers = int(os.environ.get('GUNICORN_WORKERS', '2'))
worker_class = 'sync'
timeout = 60  # outbound calls time out after HTTP_TIMEOUT, well below this
keepalive = 5
graceful_timeout = 30

# Logging
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Process naming
proc_name = 'news_relay'

# Server mechanics
daemon = False
preload_app = True
