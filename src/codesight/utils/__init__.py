"""Shared utilities for codesight servers."""
