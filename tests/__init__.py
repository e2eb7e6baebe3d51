"""Test suite for subdir-sizes."""
