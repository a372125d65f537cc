"""
Training configuration.

Shared settings for the training loop and the demo CLI.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class TrainConfig:
    """
    Attributes:
        epochs (int): Number of full passes over the samples
        learning_rate (float): SGD step size
        seed (Optional[int]): Seed for weight initialization; None draws fresh entropy
        hidden (Tuple[int, ...]): Hidden layer sizes of the demo MLP
        activation_last_layer (bool): Apply tanh on the output layer
        log_every (int): Log the loss every N epochs (0 disables)
    """
    epochs: int = 20
    learning_rate: float = 0.1
    seed: Optional[int] = None
    hidden: Tuple[int, ...] = field(default=(4, 4))
    activation_last_layer: bool = True
    log_every: int = 1

    def __post_init__(self):
        self.hidden = tuple(int(h) for h in self.hidden)
        self.validate()

    def validate(self):
        if self.epochs <= 0:
            raise ValueError(f"epochs must be positive, got {self.epochs}")
        if not self.learning_rate > 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.log_every < 0:
            raise ValueError(f"log_every must be >= 0, got {self.log_every}")
        if not self.hidden or any(h <= 0 for h in self.hidden):
            raise ValueError(f"hidden sizes must be non-empty and positive, got {self.hidden}")

    @classmethod
    def from_args(cls, args) -> "TrainConfig":
        """Build from an argparse namespace (see valuegrad.__main__)."""
        return cls(
            epochs=args.epochs,
            learning_rate=args.lr,
            seed=args.seed,
            hidden=parse_hidden(args.hidden),
            activation_last_layer=not args.linear_output,
            log_every=args.log_every,
        )


def parse_hidden(text: str) -> Tuple[int, ...]:
    """Parse '4,4' into (4, 4)."""
    return tuple(int(s) for s in text.split(',') if s.strip())
