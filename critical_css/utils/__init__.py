"""Utilities for Critical CSS."""
