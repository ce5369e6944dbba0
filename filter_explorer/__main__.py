"""
Filter Explorer - command line front end

Usage:
    python -m filter_explorer butterworth --order 4 --cutoff 0.25
    python -m filter_explorer comb --alpha 0.5 --delay 4 --feedback

Designs a preset filter, prints its coefficients, pole moduli and a coarse
magnitude response. Parameters not given on the command line come from the
configured preset defaults.

Environment Variables:
    FILTER_EXPLORER_ENVIRONMENT - Configuration environment (default: development)
    FILTER_EXPLORER_LOG_LEVEL - Logging level (default: INFO)

Variables may also be placed in a .env file next to the config directory.
"""

import argparse
import dataclasses
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from filter_explorer.core.config_manager import (
    ConfigurationError, ConfigurationManager, configure_logging
)
from filter_explorer.exceptions import FilterDesignError
from filter_explorer.filters.design.filter_designer import PresetFilterDesigner
from filter_explorer.filters.digital_filter import DigitalFilter
from filter_explorer.interfaces import FilterDescriptor, FilterFamily

logger = logging.getLogger('filter_explorer.cli')

OFF = "off"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="filter_explorer",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description="Design a pole/zero IIR filter preset and inspect the result."
    )
    p.add_argument("family", choices=[f.value for f in FilterFamily] + [OFF],
                   help="Filter family; 'off' is the identity filter.")
    p.add_argument("--config-dir", type=Path, default=None,
                   help="Directory containing config/default.yaml and .env. Defaults to the working directory.")

    g = p.add_argument_group("Preset parameters")
    g.add_argument("--cutoff", type=float,
                   help="Cutoff as a fraction of pi (0 < cutoff < 1).")
    g.add_argument("--order", type=int, help="Filter order (moving average length).")
    g.add_argument("--ripple", type=float, help="Chebyshev passband ripple epsilon.")
    g.add_argument("--lambda", dest="lambda_", type=float, help="Leaky integrator lambda.")
    g.add_argument("--alpha", type=float, help="Comb filter scale factor.")
    g.add_argument("--delay", type=int, help="Comb filter delay in samples.")
    g.add_argument("--highpass", action="store_true", help="Design a highpass instead of a lowpass.")
    g.add_argument("--feedback", action="store_true", help="Feedback instead of feedforward comb.")

    g = p.add_argument_group("Output")
    g.add_argument("--points", type=int, default=17,
                   help="Number of magnitude response rows between -pi and pi.")
    return p


def _preset_overrides(args: argparse.Namespace) -> dict:
    overrides = {}
    if args.cutoff is not None:
        overrides['cutoff'] = args.cutoff * math.pi
    if args.order is not None:
        overrides['order'] = args.order
    if args.ripple is not None:
        overrides['ripple'] = args.ripple
    if args.lambda_ is not None:
        overrides['lambda_'] = args.lambda_
    if args.alpha is not None:
        overrides['alpha'] = args.alpha
    if args.delay is not None:
        overrides['delay'] = args.delay
    if args.highpass:
        overrides['lowpass'] = False
    if args.feedback:
        overrides['feedforward'] = False
    return overrides


def report(engine: DigitalFilter, points: int) -> List[str]:
    """Human readable summary of the engine's current design"""
    lines = []
    coefficients = engine.coefficients
    lines.append(f"order: {coefficients.order}")
    lines.append("b: " + ", ".join(str(c) for c in coefficients.b))
    lines.append("a: " + ", ".join(str(c) for c in coefficients.a))

    if engine.poles:
        moduli = ", ".join(f"{pole.modulus():.6f}" for pole in engine.poles)
        lines.append(f"pole moduli: {moduli}")
    lines.append(f"stable: {'yes' if engine.is_stable() else 'NO'}")

    response = engine.frequency_response(points)
    lines.append("omega/pi    |H|")
    for omega, magnitude in zip(response.frequencies, response.magnitude):
        lines.append(f"{omega / math.pi:+8.3f}  {magnitude:10.6f}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line front end"""
    args = build_parser().parse_args(argv)
    base_path = args.config_dir or Path.cwd()

    # Variables already set in the environment take precedence over .env
    load_dotenv(base_path / ".env")

    try:
        config = ConfigurationManager(base_path).load_configuration()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Invalid configuration: {e}")
        return 2

    configure_logging(config)

    try:
        if args.family == OFF:
            descriptor = FilterDescriptor.identity()
        else:
            family = FilterFamily(args.family)
            preset = config.presets.build(family)
            overrides = {
                key: value for key, value in _preset_overrides(args).items()
                if key in {f.name for f in dataclasses.fields(preset)}
            }
            preset = dataclasses.replace(preset, **overrides)
            descriptor = PresetFilterDesigner().design(preset)

        engine = DigitalFilter(descriptor)

    except FilterDesignError as e:
        logger.error(f"Filter design failed: {e}")
        return 1

    for line in report(engine, args.points):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
