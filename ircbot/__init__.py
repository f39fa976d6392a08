"""Line-oriented IRC bot: protocol engine plus a small set of built-in commands."""

__version__ = "0.1.0"
