import os

# Application
wsgi_app = "gallery_admin:create_app()"

# Bind & workers. Each worker is a separate process; shared state lives in
# the database and Redis only.
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by the container runtime)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers from the load balancer
forwarded_allow_ips = "*"
proxy_protocol = False
