import logging, sys
from typing import Optional

from app.settings import LOG_LEVEL

# Chatty third-party loggers kept at WARNING unless the root goes to DEBUG
QUIET_LOGGERS = ("urllib3", "httpx", "watchdog")

def setup_logging(level: Optional[str] = None):
    """Configure the root logger once; shared by the API server and the Streamlit client."""
    logger = logging.getLogger()
    if logger.handlers:  # don’t double add on reload / streamlit reruns
        return logger
    lvl = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    logger.setLevel(lvl)
    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s :: %(message)s"))
    logger.addHandler(h)
    if lvl > logging.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    return logger
