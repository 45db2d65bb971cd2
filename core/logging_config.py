import logging
import logging.handlers
import sys
from pathlib import Path
from pythonjsonlogger.json import JsonFormatter
from middleware.request_id import RequestIDFilter


class CustomJsonFormatter(JsonFormatter):
    """
    JSON formatter that stamps every entry with the standard fields.
    """
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = record.created
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno
        log_record['request_id'] = getattr(record, 'request_id', '-')


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(log_level: str = "INFO", log_dir: str = "logs"):
    """
    Configure application-wide logging.

    Console output follows LOG_LEVEL, app.log keeps everything as JSON and
    error.log keeps ERROR and above.

    Args:
        log_level: Minimum console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory where log files will be stored
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    json_formatter = CustomJsonFormatter(
        '%(timestamp)s %(level)s %(logger)s %(message)s'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    request_id_filter = RequestIDFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(console_formatter)

    handlers = [
        console_handler,
        _rotating_handler(log_path / "app.log", logging.DEBUG, json_formatter),
        _rotating_handler(log_path / "error.log", logging.ERROR, json_formatter),
    ]

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # setup_logging may run more than once (tests, reloads)
    root_logger.handlers.clear()

    for handler in handlers:
        handler.addFilter(request_id_filter)
        root_logger.addHandler(handler)

    for noisy in ("uvicorn", "uvicorn.access", "uvicorn.error", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    # passlib warns about bcrypt's missing __about__ on every start
    logging.getLogger("passlib.handlers.bcrypt").setLevel(logging.ERROR)

    root_logger.info(
        "Logging configured",
        extra={
            "log_level": log_level,
            "log_dir": str(log_path.absolute())
        }
    )
