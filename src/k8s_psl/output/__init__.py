"""Rendering of the wrapper's own outcome report."""
