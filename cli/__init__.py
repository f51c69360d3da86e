# -*- coding: utf-8 -*-
"""
Command-line entry points (run with `python -m cli.<name>`):

- find_path   : route one start/goal pair, print ASCII map, optional PNG
- benchmark   : random-grid sweep with oracle cross-check, CSV output
"""
__all__ = [
    "find_path",
    "benchmark",
]
