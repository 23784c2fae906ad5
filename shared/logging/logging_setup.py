from datetime import datetime
from pytz import timezone
import logging.config
import logging
import os

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# console only, selected with extra={"color": "green"}
ANSI_COLORS = {
    "green": "\033[32m",
    "red": "\033[31m",
}
ANSI_RESET = "\033[0m"


def get_loglevel() -> int:
    return logging.DEBUG if os.getenv("LOG_LEVEL", "info").lower() == "debug" else logging.INFO


class TimezoneFormatter(logging.Formatter):
    """Renders timestamps in the configured timezone and marks warnings and errors.

    With colored=True a record carrying a known "color" attribute is wrapped in
    ANSI escapes; the file handler uses colored=False.
    """

    def __init__(self, tz_name: str, colored: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.tz = timezone(tz_name)
        self.colored = colored

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, self.tz)
        return dt.strftime(datefmt) if datefmt else dt.isoformat()

    def format(self, record) -> str:
        marker = "⛔ " if record.levelno >= logging.ERROR else "⚠️ " if record.levelno == logging.WARNING else ""

        # handlers share the record, so mark a copy
        record = logging.makeLogRecord(record.__dict__)
        record.msg = marker + record.getMessage()
        record.args = ()
        line = super().format(record)

        ansi = ANSI_COLORS.get(getattr(record, "color", None) or "") if self.colored else None
        return f"{ansi}{line}{ANSI_RESET}" if ansi else line


def _formatter(tz_name: str, colored: bool) -> dict:
    return {
        "()": TimezoneFormatter,
        "format": LOG_FORMAT,
        "datefmt": DATE_FORMAT,
        "tz_name": tz_name,
        "colored": colored,
    }


def setup_logging() -> logging.Logger:
    """Configure console and file logging and return the service logger.

    Reads LOG_LEVEL, TIMEZONE and ROOT_DIR; the log file is <ROOT_DIR>/logs/app.log.
    """
    log_dir = os.path.join(os.getenv("ROOT_DIR", os.getcwd()), "logs")
    os.makedirs(log_dir, exist_ok=True)
    tz_name = os.getenv("TIMEZONE", "Europe/Berlin")
    loglevel = get_loglevel()

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": _formatter(tz_name, colored=False),
            "colored": _formatter(tz_name, colored=True),
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "colored",
                "stream": "ext://sys.stdout",
            },
            "file": {
                "class": "logging.FileHandler",
                "formatter": "plain",
                "filename": os.path.join(log_dir, "app.log"),
                "encoding": "utf-8",
            },
        },
        "root": {"handlers": ["console", "file"], "level": loglevel},
        # request lines from httpx only in debug mode
        "loggers": {"httpx": {"level": loglevel if loglevel == logging.DEBUG else logging.WARNING}},
    })

    return logging.getLogger("fitplan")
