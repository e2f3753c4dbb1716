"""
Input/Output Manager
Writes solve results to JSON (full record) and CSV (sampled points only).
"""
import csv
import json
import logging
from importlib.metadata import version, PackageNotFoundError
from typing import Any, Dict

from elasticbending.model.results import ElasticaOutput

logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("elasticbending")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"


def output_to_dict(output: ElasticaOutput) -> Dict[str, Any]:
    """Plain-Python view of an output, suitable for json.dump."""
    return {
        "version": APP_VERSION,
        "state": output.state.value,
        "length": output.length,
        "height": output.height,
        "widths": output.widths,
        "angles": output.angles,
        "forces": output.forces,
        "m": output.m_values,
        "diagnostics": output.diagnostics.to_list(),
        "branches": [
            {
                "m": branch.solution.m,
                "width": branch.width,
                "height": branch.height,
                "angle": branch.angle,
                "force": branch.force,
                "points": branch.points.tolist(),
            }
            for branch in output.branches
        ],
    }


class IOManager:

    @staticmethod
    def save_json(output: ElasticaOutput, filepath: str) -> None:
        logger.info(f"Saving result to: {filepath}")
        with open(filepath, mode='w', encoding='utf-8') as f:
            json.dump(output_to_dict(output), f, indent=2)

    @staticmethod
    def save_points_csv(output: ElasticaOutput, filepath: str) -> None:
        """One row per sampled point: branch index, x, y, z."""
        logger.info(f"Saving points of {len(output.branches)} branch(es) to: {filepath}")
        with open(filepath, mode='w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(["branch", "x", "y", "z"])
            for i, branch in enumerate(output.branches):
                for x, y, z in branch.points:
                    writer.writerow([i, repr(float(x)), repr(float(y)), repr(float(z))])
