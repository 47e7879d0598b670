"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the filesystem,
network probes and HTTP clients.
"""

from cdnrelay.infrastructure import gateways, repositories, services

__all__ = ["gateways", "repositories", "services"]
