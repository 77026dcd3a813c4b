from dcdelaunay.grid.adjacency import VertexConnectivity


def test_connect_symmetric():
    con=VertexConnectivity(4)
    con.connect(0,1)
    assert con.is_connected(0,1)
    assert con.is_connected(1,0)
    assert not con.is_connected(0,2)

    # idempotent
    con.connect(1,0)
    assert con.neighbors(0)==[1]
    assert con.neighbors(1)==[0]
    assert con.Nedges()==1

def test_disconnect():
    con=VertexConnectivity(3)
    con.connect(0,1)
    con.connect(0,2)
    con.disconnect(1,0)
    assert not con.is_connected(0,1)
    assert not con.is_connected(1,0)
    assert con.neighbors(0)==[2]

def test_disconnect_all():
    con=VertexConnectivity(5)
    for n in range(1,5):
        con.connect(0,n)
    con.connect(1,2)
    assert con.degree(0)==4

    con.disconnect_all(0)
    assert con.degree(0)==0
    for n in range(1,5):
        assert 0 not in con.neighbors(n)
    assert con.is_connected(1,2)
    assert con.Nedges()==1

def test_large_degree():
    # no fixed limit on the number of neighbors
    con=VertexConnectivity(40)
    for n in range(1,40):
        con.connect(0,n)
    assert con.degree(0)==39
    assert all(con.is_connected(n,0) for n in range(1,40))

def test_common_neighbor():
    # two triangles sharing edge 1-2
    con=VertexConnectivity(4)
    for a,b in [(0,1),(0,2),(1,2),(1,3),(2,3)]:
        con.connect(a,b)
    assert sorted(con.common_neighbors(1,2))==[0,3]
    assert con.common_neighbor(1,2,exclude=0)==3
    assert con.common_neighbor(1,2,exclude=3)==0
    assert con.common_neighbor(0,3) in (1,2)
    con.disconnect(0,1)
    assert con.common_neighbor(1,2,exclude=3) is None

def test_edges():
    con=VertexConnectivity(4)
    for a,b in [(2,0),(1,2),(3,1)]:
        con.connect(a,b)
    assert sorted(con.edges())==[(0,2),(1,2),(1,3)]
    assert len(con)==4

def test_self_link():
    con=VertexConnectivity(2)
    try:
        con.connect(1,1)
        assert False
    except ValueError:
        pass
