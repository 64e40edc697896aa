"""
Shared utilities: logging with secret masking, settings persistence and the
daemon thread pool used for concurrent fetches.
"""
