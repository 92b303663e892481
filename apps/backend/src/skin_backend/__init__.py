"""
Overlay Backend - Flask API for MineSkin skin overlays

This app is deployed as a single service. It:
1. Accepts a base skin URL and a base64 overlay on POST /api
2. Composites them and keys out the reserved blue
3. Uploads the result to MineSkin and caches the response in Redis

Deployment:
    pip install mineskin-overlay
    mineskin-overlay serve
"""

from .app import create_app
from .config import Config

__all__ = ["create_app", "Config"]
