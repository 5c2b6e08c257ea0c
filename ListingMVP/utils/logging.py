import json
import logging
import sys
from datetime import datetime, timezone

# SDK loggers that chatter at INFO on every request
NOISY_LOGGERS = ("openai", "httpx", "httpcore", "botocore", "boto3", "urllib3")

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


# =========================================================
# 📝 ROOT LOGGER SETUP
# =========================================================
def setup_logging(level="INFO", format_type="standard"):
    """Send all logs to stdout, as pipe-delimited text or one JSON object per line."""
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if format_type == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    logging.getLogger("ListingMVP").setLevel(log_level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    def format(self, record):
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)
