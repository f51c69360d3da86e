# -*- coding: utf-8 -*-
"""
Evaluation utilities: path metrics and validation.
"""

from __future__ import annotations

from .metrics import manhattan, path_metrics, validate_path

__all__ = ["manhattan", "path_metrics", "validate_path"]
