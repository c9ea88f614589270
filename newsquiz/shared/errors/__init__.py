# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import AppError, DomainError, StoreFailureError, ValidationError
from .http import register_error_handler, render_error

__all__ = [
    "AppError",
    "DomainError",
    "StoreFailureError",
    "ValidationError",
    "register_error_handler",
    "render_error",
]
