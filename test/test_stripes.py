from dcdelaunay.grid.adjacency import VertexConnectivity
from dcdelaunay.grid import stripes


def run(xy):
    con=VertexConnectivity(len(xy))
    sub_seq=stripes.initial_stripes(xy,con)
    return sub_seq,set(con.edges())

def test_triangle():
    sub_seq,edges=run( [(0,0),(0,1),(1,0)] )
    assert sub_seq==[0,3]
    assert edges=={(0,1),(0,2),(1,2)}

def test_collinear_triple():
    sub_seq,edges=run( [(0,0),(1,0),(2,0)] )
    assert sub_seq==[0,3]
    assert edges=={(0,1),(1,2)}

def test_general_runs():
    xy=[(0,0),(1,1),(2,0),(3,1),(4,0),(5,1)]
    sub_seq,edges=run(xy)
    assert sub_seq==[0,3,6]
    assert edges=={(0,1),(1,2),(0,2),
                   (3,4),(4,5),(3,5)}

def test_leftover_pair_and_single():
    sub_seq,edges=run( [(0,0),(1,1),(2,0),(3,1),(4,0)] )
    assert sub_seq==[0,3,5]
    assert (3,4) in edges

    sub_seq,edges=run( [(0,0),(1,1),(2,0),(3,1)] )
    assert sub_seq==[0,3,4]
    assert edges=={(0,1),(1,2),(0,2)}

def test_vertical_run_fanned_forward():
    # first two share x, so the run takes in the next vertex
    sub_seq,edges=run( [(0,0),(0,1),(1,0),(1,1)] )
    assert sub_seq==[0,3,4]
    assert edges=={(0,1),(0,2),(1,2)}

def test_vertical_run_at_end():
    sub_seq,edges=run( [(0,0),(0,1),(0,2)] )
    assert sub_seq==[0,3]
    assert edges=={(0,1),(1,2)}

def test_vertical_run_fanned_back():
    # second and third share x, fanned from the first
    xy=[(0,0),(1,0),(1,1),(1,2),(2,0)]
    sub_seq,edges=run(xy)
    assert sub_seq==[0,4,5]
    assert edges=={(0,1),(1,2),(0,2),(2,3),(0,3)}

def test_vertical_pair_deferred():
    # third and fourth share x, so only the first pair is kept
    xy=[(0,0),(1,1),(2,0),(2,1),(3,0)]
    sub_seq,edges=run(xy)
    assert sub_seq==[0,2,5]
    assert (0,1) in edges
    assert (2,3) in edges
    assert (1,2) not in edges
