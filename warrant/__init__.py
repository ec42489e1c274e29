"""warrant: policy-based authorization decisions for Python objects."""
