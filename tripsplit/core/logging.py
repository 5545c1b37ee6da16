import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL statements are controlled by SQL_ECHO, not by the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
