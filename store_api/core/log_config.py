import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the application process"""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL statements are controlled by Settings.sql_echo instead
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
