"""Configuration package for minedock."""
