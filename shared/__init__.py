"""
Shared utilities for volume binder components.

This package contains common functionality used by processes embedding the binder:
- logging_config: consistent logging setup
"""
