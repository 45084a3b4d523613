"""CQRS Commands for insights."""

from .log_waste import LogWasteCommand, LogWasteCommandHandler

__all__ = ["LogWasteCommand", "LogWasteCommandHandler"]
