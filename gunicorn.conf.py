import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each request spends most of its time waiting on Wikipedia and the proxies,
# so threads scale better here than extra worker processes.
workers = int(os.environ.get("WEB_CONCURRENCY", "1") or 1)
threads = int(os.environ.get("GUNICORN_THREADS", "4") or 4)
# Worst case walks the full proxy chain for both airports.
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "120") or 120)

worker_class = os.environ.get("GUNICORN_WORKER_CLASS", "gthread")
wsgi_app = os.environ.get("GUNICORN_APP", "main:app")
