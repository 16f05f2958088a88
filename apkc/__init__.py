"""Compile and bundle Android projects, and run them on a device, with the SDK tools."""

__version__ = "0.1.0"