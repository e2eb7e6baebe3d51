"""Shared utility modules.

This package provides the logging setup used by the application runner and
the scan context attached to log records during analysis.
"""
