"""Shared utilities for minedock."""
