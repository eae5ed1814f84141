"""Extract video and image stream information from web pages and merge downloaded parts."""

__version__ = "0.1.0"