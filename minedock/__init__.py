"""
minedock: manage a Minecraft server container on the local Docker daemon.
"""

from .config.settings import VERSION

__version__ = VERSION
