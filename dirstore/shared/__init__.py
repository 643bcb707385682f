"""Shared utilities for dirstore."""

from dirstore.shared.logger import get_store_logger
from dirstore.shared.config import StoreConfig, load_store_config

__all__ = ["get_store_logger", "StoreConfig", "load_store_config"]
