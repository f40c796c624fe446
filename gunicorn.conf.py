"""Gunicorn settings: gunicorn -c gunicorn.conf.py wsgi:server"""
import json
import os
import threading
import urllib.error
import urllib.request

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Ledgers live in process memory; a second worker would hold its own copy.
workers = 1
timeout = 60

RELOAD_DELAY = 3


def _reload_ledgers(worker):
    port = bind.rsplit(":", 1)[-1]
    url = f"http://127.0.0.1:{port}/api/reload"
    try:
        with urllib.request.urlopen(url, timeout=30) as resp:
            result = json.load(resp)
    except (urllib.error.URLError, OSError, ValueError) as e:
        worker.log.warning("Ledger reload via %s failed: %s", url, e)
        return
    if result.get("errors"):
        worker.log.warning("Ledger reload incomplete: %s", "; ".join(result["errors"]))
    else:
        worker.log.info("Ledgers reloaded: %s transactions, %s inventory rows",
                        result.get("transactions"), result.get("inventory"))


def post_worker_init(worker):
    """Refresh the ledgers once the worker is accepting requests."""
    timer = threading.Timer(RELOAD_DELAY, _reload_ledgers, args=(worker,))
    timer.daemon = True
    timer.start()
