"""Shared kernel: errors, events, account context and ports."""
