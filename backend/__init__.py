"""
Backend package: application factory, settings, and the uvicorn entry point.
"""
