# storefront/log.py
import logging

from rich.logging import RichHandler

def configure_logging(level: str = "WARNING", console=None) -> None:
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    logging.basicConfig(level=level.upper(), format="%(name)s: %(message)s",
                        datefmt="[%X]", handlers=[handler], force=True)
