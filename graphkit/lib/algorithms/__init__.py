"""Graph algorithms operating on node indices of a ``graphkit.lib.graph.Graph``."""
