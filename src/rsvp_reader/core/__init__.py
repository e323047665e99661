"""Parsing, segmentation and playback."""
