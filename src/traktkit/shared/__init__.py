"""Shared utilities for traktkit: errors, logging and constants."""
