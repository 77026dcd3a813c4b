from dcdelaunay.grid.adjacency import VertexConnectivity
from dcdelaunay.grid import constraints
from dcdelaunay.grid.errors import (IntersectingConstraints,
                                    ConstraintCollinearNode)


def square():
    # rank order of the unit square, with the unconstrained diagonal 1-2
    xy=[(0,0),(0,1),(1,0),(1,1)]
    con=VertexConnectivity(4)
    for a,b in [(0,1),(0,2),(1,2),(2,3),(1,3)]:
        con.connect(a,b)
    return xy,con

def strip():
    # 4 triangles in a row, 0 and 5 at the ends
    xy=[(0,0),(1,-1),(1,1),(2,-1),(2,1),(3,0)]
    con=VertexConnectivity(6)
    for a,b in [(0,1),(0,2),(1,2),(1,3),(2,3),
                (2,4),(3,4),(3,5),(4,5)]:
        con.connect(a,b)
    return xy,con

def test_seed_chains():
    xy,con=square()
    assert constraints.seed_chains(xy,con,0,3)==(1,2)

def test_seed_chains_collinear():
    xy=[(0,0),(1,0),(2,0),(1,1)]
    con=VertexConnectivity(4)
    con.connect(0,1)
    con.connect(0,3)
    try:
        constraints.seed_chains(xy,con,0,2)
        assert False
    except ConstraintCollinearNode as exc:
        assert exc.node==1

def test_walk_channel():
    xy,con=strip()
    left,right=constraints.walk_channel(xy,con,0,5)
    assert left==[2,4]
    assert right==[1,3]

def test_insert_square():
    xy,con=square()
    assert constraints.insert_constraint(xy,con,0,3)
    assert con.is_connected(0,3)
    assert not con.is_connected(1,2)
    assert set(con.edges())=={(0,1),(0,2),(0,3),(1,3),(2,3)}

    # already present
    assert not constraints.insert_constraint(xy,con,3,0)

def test_insert_strip():
    xy,con=strip()
    assert constraints.insert_constraint(xy,con,0,5)
    for a,b in [(1,2),(2,3),(3,4)]:
        assert not con.is_connected(a,b)
    for a,b in [(0,5),(2,5),(1,5)]:
        assert con.is_connected(a,b)
    # same number of edges as any triangulation of these points
    assert con.Nedges()==9

def test_retriangulate():
    xy=[(0,0),(1,1),(2,3),(3,1),(4,0)]
    con=VertexConnectivity(5)
    for a,b in [(0,1),(1,2),(2,3),(3,4),(0,4)]:
        con.connect(a,b)
    constraints.retriangulate(xy,con,[0,1,2,3,4],0,4,1)
    assert con.is_connected(1,4)
    assert con.is_connected(1,3)
    assert con.Nedges()==7

def test_apply_constraints():
    xy,con=square()
    constrained=constraints.apply_constraints(xy,con,[(3,0)])
    assert constrained=={(0,3)}

def test_crossing_constraints():
    xy,con=square()
    try:
        constraints.apply_constraints(xy,con,[(0,3),(2,1)])
        assert False
    except IntersectingConstraints as exc:
        assert exc.edge==(0,3)
