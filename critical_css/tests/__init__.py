"""Tests for Critical CSS."""
