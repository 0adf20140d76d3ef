"""Shared wire layer for pushing PNG screenshots to, and pulling them from, an image server."""
