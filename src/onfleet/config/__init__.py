"""SDK configuration: settings and structured logging."""
