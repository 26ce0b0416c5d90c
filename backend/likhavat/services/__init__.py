"""Business logic layer. Each module exposes a stateless singleton."""
