"""
Elastica solver: the shape of a thin elastic rod bent by horizontal end
forces with pinned ends, from any two of length, width, height and angle.
"""
from elasticbending.config import SolverSettings
from elasticbending.model.boundary import BoundaryConfiguration, BoundaryQuantity, ElasticaInput
from elasticbending.model.diagnostics import Diagnostic, DiagnosticLog, MessageLevel
from elasticbending.model.geometry_primitives import Plane, Point, Vector
from elasticbending.model.results import ElasticaBranch, ElasticaOutput, ResolverState, ShapeSolution, SolverResult
from elasticbending.solvers.solver import ElasticaInputError, ElasticaSolver, resolve_shape, solve_elastica

__all__ = [
    "BoundaryConfiguration",
    "BoundaryQuantity",
    "Diagnostic",
    "DiagnosticLog",
    "ElasticaBranch",
    "ElasticaInput",
    "ElasticaInputError",
    "ElasticaOutput",
    "ElasticaSolver",
    "MessageLevel",
    "Plane",
    "Point",
    "ResolverState",
    "ShapeSolution",
    "SolverResult",
    "SolverSettings",
    "Vector",
    "resolve_shape",
    "solve_elastica",
]
