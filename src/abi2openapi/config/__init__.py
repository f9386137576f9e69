# flake8: noqa: F401
from .config import Configuration, RECOGNIZED_OUTPUTS
