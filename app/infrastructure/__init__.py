"""Infrastructure modules for the pipeline-run notifier.

Centralized infrastructure components:
- configuration: Settings management (settings)
- logging: Structured logging (configure_logging, get_module_logger)
- security: Redacting secret holder (SecretBytes, wrap, reveal)
"""
