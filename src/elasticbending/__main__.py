"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from elasticbending.config import SolverSettings
from elasticbending.logging_config import setup_logging
from elasticbending.model.boundary import BoundaryConfiguration, ElasticaInput
from elasticbending.model.geometry_primitives import Point
from elasticbending.model.io import IOManager
from elasticbending.model.results import ElasticaOutput
from elasticbending.solvers.solver import ElasticaSolver
from elasticbending.utils import deg2rad, rad2deg

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elasticbending",
        description="Shape of an elastically bent rod with pinned ends (elastica). "
                    "Give two of length, width (or point B), height and angle.",
    )
    parser.add_argument("--length", "-L", type=float, help="arc length of the rod (> 0)")
    parser.add_argument("--width", "-W", type=float, help="distance between the ends")
    parser.add_argument("--height", "-H", type=float, help="bow height (negative bends down)")
    parser.add_argument("--angle", "-A", type=float, help="end tangent angle (radians unless --degrees)")
    parser.add_argument("--degrees", action="store_true", help="angle input and output in degrees")
    parser.add_argument("--modulus", "-E", type=float, help="Young's modulus in GPa")
    parser.add_argument("--inertia", "-I", type=float, help="second moment of area")
    parser.add_argument("--point-a", nargs=3, type=float, default=[0.0, 0.0, 0.0], metavar=("X", "Y", "Z"))
    parser.add_argument("--point-b", nargs=3, type=float, metavar=("X", "Y", "Z"))
    parser.add_argument("--ignore-self-intersecting", action="store_true",
                        help="suppress solutions with a negative width")
    parser.add_argument("--settings", help="JSON file with solver settings")
    parser.add_argument("--json", dest="json_out", help="write the full result to this JSON file")
    parser.add_argument("--csv", dest="csv_out", help="write the sampled points to this CSV file")
    parser.add_argument("--plot", action="store_true", help="plot the curve(s)")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    parser.add_argument("--log-file", help="also write a DEBUG log to this file")
    return parser


def format_summary(output: ElasticaOutput, degrees: bool = False) -> str:
    lines = [f"state: {output.state.value}"]
    if output.succeeded:
        lines.append(f"length: {output.length:.10g}")
        lines.append(f"height: {output.height:.10g}")
        for i, branch in enumerate(output.branches):
            angle = rad2deg(branch.angle) if degrees else branch.angle
            lines.append(
                f"branch {i}: m={branch.solution.m:.12g} width={branch.width:.10g} "
                f"angle={angle:.10g} force={branch.force:.10g} points={len(branch.points)}"
            )
    for diagnostic in output.diagnostics:
        lines.append(str(diagnostic))
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file)
    logger.debug(f"Arguments: {vars(args)}")

    settings = SolverSettings.from_json(args.settings) if args.settings else SolverSettings()
    if args.ignore_self_intersecting:
        settings = SolverSettings.from_dict({**settings.to_dict(), "ignore_self_intersecting": True})

    angle = args.angle
    if angle is not None and args.degrees:
        angle = deg2rad(angle)

    request = ElasticaInput(
        point_a=Point.from_array(args.point_a),
        point_b=Point.from_array(args.point_b) if args.point_b else None,
        boundary=BoundaryConfiguration(length=args.length, width=args.width, height=args.height, angle=angle),
        modulus=args.modulus,
        inertia=args.inertia,
    )
    output = ElasticaSolver(settings).solve(request)
    print(format_summary(output, degrees=args.degrees))

    if args.json_out:
        IOManager.save_json(output, args.json_out)
    if args.csv_out:
        IOManager.save_points_csv(output, args.csv_out)
    if args.plot and output.succeeded:
        output.plot()

    return 0 if output.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
