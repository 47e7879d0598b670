"""
cdnrelay - multi-origin asset delivery with health-checked failover.

Layer Structure:
- Domain: Origins, manifests, rule engine, origin selection, asset loader
- Application: Use cases and DTOs
- Infrastructure: Probes, broadcast channel, file storage, HTTP gateways
- Presentation: FastAPI controllers
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, application entry points and configuration
"""
