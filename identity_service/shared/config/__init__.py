# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AppConfig,
    DatabaseConfig,
    HashingConfig,
    SecurityConfig,
    TokenConfig,
    load_config,
    load_config_or_exit,
    parse_duration,
)

__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "HashingConfig",
    "SecurityConfig",
    "TokenConfig",
    "load_config",
    "load_config_or_exit",
    "parse_duration",
]
