"""Rendering of ServiceResult for the terminal and for --json."""
