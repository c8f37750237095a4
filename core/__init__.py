"""Shared configuration, logging and date/time utilities."""
