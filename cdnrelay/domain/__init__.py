"""
Domain Layer Package

This package contains the core rules of asset delivery: origins and
their health, delivery manifests, and the failover asset loader. It has
no dependencies on external frameworks or infrastructure concerns.
"""

# Re-export submodules
from cdnrelay.domain import entities, gateways, ports, repositories, services

__all__ = ["entities", "gateways", "repositories", "services", "ports"]
