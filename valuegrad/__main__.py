"""
Demo: train a small MLP on a four-sample toy dataset.

    python -m valuegrad --epochs 50 --lr 0.05 --seed 0 --render pred.svg
"""

import argparse
import logging

from .config import TrainConfig
from .core.graph_utils import print_graph_summary
from .logger import setup_logger
from .nn import MLP
from .train import train

XS = [
    [2.0, 3.0, -1.0],
    [3.0, -1.0, 0.5],
    [0.5, 1.0, 1.0],
    [1.0, 1.0, -1.0],
]
YS = [1.0, -1.0, -1.0, 1.0]


def build_parser():
    """Command line arguments."""
    parser = argparse.ArgumentParser(
        prog='valuegrad',
        description='Train a scalar-autograd MLP on a toy dataset',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--epochs', type=int, default=20,
                       help='Number of training epochs')
    parser.add_argument('--lr', type=float, default=0.1,
                       help='Learning rate')
    parser.add_argument('--seed', type=int, default=None,
                       help='Seed for weight initialization')
    parser.add_argument('--hidden', type=str, default='4,4',
                       help='Comma-separated hidden layer sizes (e.g., "4,4")')
    parser.add_argument('--linear-output', action='store_true',
                       help='No tanh on the output layer')
    parser.add_argument('--log-every', type=int, default=1,
                       help='Log the loss every N epochs (0 disables)')
    parser.add_argument('--render', type=str, default=None,
                       help='Render the final prediction graph to this path (needs graphviz `dot`)')
    parser.add_argument('--summary', action='store_true',
                       help='Print a summary of the final prediction graph')
    parser.add_argument('--log-level', type=str, default='INFO',
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       help='Logging level')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logger = setup_logger(level=getattr(logging, args.log_level))
    config = TrainConfig.from_args(args)

    model = MLP(len(XS[0]), list(config.hidden) + [1],
                activation_last_layer=config.activation_last_layer, rng=config.seed)
    print(model.stat())

    history = train(model, XS, YS, config)
    logger.info("loss: %.6f -> %.6f", history[0], history[-1])

    pred = model(XS[0])[0].with_label("pred")
    pred.backward()
    print(f"Prediction for {XS[0]}: {float(pred.data):.6f} (target {YS[0]})")

    if args.summary:
        print_graph_summary(pred)
    if args.render:
        from .view import render
        render(pred, args.render)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
