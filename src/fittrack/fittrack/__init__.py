# ABOUTME: Core package initialization for the FitTrack backend
# ABOUTME: Provides token authentication, rate limiting and versioned document storage

"""
FitTrack core package.

This package provides the trust-and-consistency layer shared by every FitTrack
request handler: signed bearer-token authentication, sliding-window rate
limiting, and an optimistic-concurrency protocol for mutating per-user JSON
documents. It follows the same separation between interfaces, models and
implementations used throughout the code base.
"""

__version__ = "0.1.0"
