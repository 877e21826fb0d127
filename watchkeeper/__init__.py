"""Container update decisions: labels, filters, restart propagation, options and an HTTP trigger API."""

__version__ = "0.1.0"