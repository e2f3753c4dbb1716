from elasticbending.solvers.solver import ElasticaSolver, resolve_shape, solve_elastica
