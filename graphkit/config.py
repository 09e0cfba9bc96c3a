"""Configuration classes for graphkit algorithms."""

from dataclasses import dataclass


@dataclass
class PageRankConfig:
    """Numeric parameters for PageRank power iteration."""

    # Probability of following a link rather than jumping uniformly
    damping: float = 0.85

    # L1 distance between successive iterates that counts as converged
    tol: float = 1e-12

    # Upper bound on power-iteration steps
    max_iter: int = 1000

    def validate(self) -> None:
        """Raise ValueError if any parameter is out of range."""
        if not 0.0 <= self.damping <= 1.0:
            raise ValueError(f"damping must be within [0, 1], got {self.damping}")
        if self.tol <= 0:
            raise ValueError(f"tol must be positive, got {self.tol}")
        if self.max_iter < 1:
            raise ValueError(f"max_iter must be at least 1, got {self.max_iter}")


# Global configuration instance
PAGERANK_CONFIG = PageRankConfig()
