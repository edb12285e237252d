"""C4 content identifiers, ID trees, manifests and ID-addressed stores."""

__version__ = "0.1.0"