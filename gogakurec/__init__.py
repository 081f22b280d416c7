"""Listings, file naming, ffmpeg arguments and HLS segment handling for recording NHK radio language courses."""

__version__ = "1.0.0"
__all__ = ["catalog", "enews", "hls", "legacy", "naming", "settings", "storage"]