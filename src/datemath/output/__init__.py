"""Output formatting: JSON, quiet, and Rich human renderers."""
