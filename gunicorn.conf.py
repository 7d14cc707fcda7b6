import multiprocessing
import os

import structlog


# 2-4 workers per CPU core, capped
workers = min(multiprocessing.cpu_count() * 2 + 1, int(os.environ.get("GUNICORN_MAX_WORKERS", "8")))
worker_class = "sync"
preload_app = True

# Prevent stuck workers
timeout = 60
keepalive = 5
graceful_timeout = 30
max_requests = 1000
max_requests_jitter = 50

loglevel = "info"
errorlog = "-"
accesslog = "-"
access_log_format = (
    '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" host="%({Host}i)s"'
)

GUNICORN_EVENTS = {
    "gunicorn.error": "gunicorn.server",
    "gunicorn.access": "gunicorn.request_handling",
}


def gunicorn_event_name_mapper(logger, name, event_dict):
    """Keep the raw gunicorn line under ``message`` and give it a stable event name."""
    event_name = GUNICORN_EVENTS.get(event_dict.get("logger"))
    raw_event = event_dict.get("event")
    if event_name and isinstance(raw_event, str):
        event_dict["message"] = raw_event
        event_dict["event"] = event_name
    return event_dict


pre_chain = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    gunicorn_event_name_mapper,
]

logconfig_dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "root": {"level": "INFO", "handlers": ["default"]},
    "loggers": {
        "gunicorn.error": {"level": "INFO", "handlers": ["default"], "propagate": False, "qualname": "gunicorn.error"},
        "gunicorn.access": {"level": "INFO", "handlers": ["default"], "propagate": False, "qualname": "gunicorn.access"},
    },
    "handlers": {
        "default": {"class": "logging.StreamHandler", "formatter": "logfmt_formatter"},
    },
    "formatters": {
        "logfmt_formatter": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.processors.LogfmtRenderer(),
            "foreign_pre_chain": pre_chain,
        }
    },
}
