"""Tools for KiriKiri engine files: KSD text scrambling, XP3 archives and PSB headers."""

__version__ = "0.1.2"