#!/usr/bin/env python3

import sys
import argparse
from memocurry.comfies.config import ConfigError
from memocurry.example import main

# Create Argument Parser
parser = argparse.ArgumentParser(
    description="Memoize a curried adder and call it repeatedly.",
    prog="memodemo"
)

parser.add_argument(
    "--config", "-c", required=False, help="Path to the configuration file."
)

parser.add_argument(
    "--values",
    "-v",
    nargs="+",
    type=int,
    required=False,
    help="Values to add to the offset; override the config file.",
)

parser.add_argument(
    "--log-level",
    "-l",
    required=False,
    help="Logging level, e.g. DEBUG to see the arguments of each call.",
)

# Parse Arguments
args = parser.parse_args()

# Run memocurry.example.main
try:
    main(args.config, args.values, args.log_level)
except ConfigError as e:
    parser.exit(2, f"{parser.prog}: error: {e}\n")

sys.exit(0)
