"""
Exceptions raised by the triangulation engine.
"""
from ..utils import set_keywords

class TriangulationError(Exception):
    def __init__(self,*a,**k):
        super(TriangulationError,self).__init__(*a)
        set_keywords(self,k)

class InvalidInputError(TriangulationError,ValueError):
    """
    Malformed vertex or constraint buffers, or constraint indices
    which do not refer to a vertex.
    """
    pass

class DuplicateVertex(InvalidInputError):
    nodes=None

class DegenerateGeometryError(TriangulationError):
    pass

class BadConstraint(DegenerateGeometryError):
    nodes=None

class IntersectingConstraints(BadConstraint):
    edge=None

class ConstraintCollinearNode(BadConstraint):
    """
    Special case of a bad constraint, when the constraint runs
    *through* an existing node
    """
    node=None
