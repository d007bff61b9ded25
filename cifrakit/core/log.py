"""Configuración mínima de logging para aplicaciones que usan cifrakit."""

import logging
import sys


def configure_logging(level: int = logging.INFO, stream=None) -> None:
    # La librería solo instala un NullHandler; el host decide si llama aquí.
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=stream or sys.stdout,
    )
