from .grid.dc_delaunay import Triangulation
from .grid.errors import (TriangulationError, InvalidInputError, DuplicateVertex,
                          DegenerateGeometryError, BadConstraint,
                          IntersectingConstraints, ConstraintCollinearNode)
