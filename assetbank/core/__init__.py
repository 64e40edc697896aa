"""
Core Client Logic
=================

This package contains the Asset Bank API client and everything it is built
from: the rate limiter, the retrying transport, the resource fetcher, the
result records and the normalizers that reshape raw API payloads.
"""
