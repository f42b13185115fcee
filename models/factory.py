"""Regressor factory — Resolves a method selector to a regressor constructor."""

from typing import Callable

from loguru import logger

from models.base import BaseRegressor
from models.linear_model import LinearRegressor

RegressorFactory = Callable[[], BaseRegressor]

DEFAULT_METHOD = "linear"

METHOD_REGISTRY: dict[str, RegressorFactory] = {
    "linear": LinearRegressor,
}


def get_regressor_factory(method: str | None) -> RegressorFactory:
    """Return the factory for a method name, falling back to linear regression."""
    key = (method or DEFAULT_METHOD).strip().lower()
    factory = METHOD_REGISTRY.get(key)
    if factory is None:
        logger.warning(f"Unknown regression method '{method}', falling back to '{DEFAULT_METHOD}'")
        factory = METHOD_REGISTRY[DEFAULT_METHOD]
    return factory
