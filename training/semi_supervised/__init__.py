"""Semi-supervised learning infrastructure shared by trial runners."""

from training.semi_supervised.base_ssl_trainer import BaseSSLTrainer, Split, SSLConfig

__all__ = [
    "BaseSSLTrainer",
    "SSLConfig",
    "Split",
]
