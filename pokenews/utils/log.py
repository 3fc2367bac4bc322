import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv(override=True)

LOG_LEVEL = os.getenv("LOG_LEVEL", "info")


def configure_logger(name: str = "pokenews") -> logging.Logger:
    """Configura e retorna o logger da aplicação."""
    logger = logging.getLogger(name)
    log_level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logger.setLevel(log_level)

    # só adiciona handler se ainda não existir (evita linhas duplicadas)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        logger.addHandler(handler)

    return logger


def create_logger(module_name: str) -> logging.Logger:
    """Logger de um módulo específico dentro do namespace pokenews."""
    return logging.getLogger(f"pokenews.{module_name}")


logger = configure_logger()

__all__ = ["logger", "configure_logger", "create_logger"]
