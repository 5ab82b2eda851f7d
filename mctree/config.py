"""
Search Configuration

Centralized settings for the MCTS engine.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional


@dataclass
class SearchConfig:
    """Configuration for the MCTS engine."""

    # UCT exploration weight (sqrt(2) is the classic UCB1 constant)
    exploration_constant: float = math.sqrt(2)

    # Seed for the engine's random generator (None = fresh OS entropy)
    seed: Optional[int] = None

    # Emit a DEBUG line for every playout
    log_playouts: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert config to dictionary.

        Returns:
            Dictionary representation of config
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'SearchConfig':
        """
        Create config from dictionary.

        Args:
            config_dict: Dictionary of configuration values

        Returns:
            SearchConfig instance
        """
        # Filter out keys that aren't valid config fields
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_dict = {k: v for k, v in config_dict.items() if k in valid_keys}
        return cls(**filtered_dict)

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if config is valid

        Raises:
            ValueError: If config values are invalid
        """
        if not math.isfinite(self.exploration_constant) or self.exploration_constant < 0:
            raise ValueError(
                f"exploration_constant must be a finite non-negative number, "
                f"got {self.exploration_constant}"
            )

        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")

        return True

    def __str__(self) -> str:
        """String representation of config."""
        lines = ["Search Configuration:"]
        lines.append(f"  UCT: exploration_constant={self.exploration_constant:.4f}")
        lines.append(f"  Random: seed={self.seed}")
        lines.append(f"  Logging: log_playouts={self.log_playouts}")
        return "\n".join(lines)


def get_default_config() -> SearchConfig:
    """
    Get the default search config.

    Returns:
        SearchConfig with the classic UCB1 exploration constant and an
        unseeded generator
    """
    return SearchConfig()  # Uses defaults


def get_test_config(seed: int = 42) -> SearchConfig:
    """
    Get a reproducible config for tests and debugging.

    Args:
        seed: Seed for the engine's random generator

    Returns:
        SearchConfig with a fixed seed and per-playout logging enabled
    """
    return SearchConfig(seed=seed, log_playouts=True)
