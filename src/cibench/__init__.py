"""ci-bench: track GitHub Actions job and step durations across PR runs."""

__version__ = "0.1.0"
