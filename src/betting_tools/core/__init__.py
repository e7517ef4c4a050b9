"""Shared configuration and timestamp helpers for betting tools."""
