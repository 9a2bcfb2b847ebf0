"""Karnataka vehicle re-registration tax estimator."""

__version__ = "0.1.0"
