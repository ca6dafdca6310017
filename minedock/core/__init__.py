"""Core Docker, world and plugin managers."""
