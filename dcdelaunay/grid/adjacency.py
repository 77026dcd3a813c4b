"""
Per-vertex adjacency for the divide and conquer triangulation.

Vertices are referred to by integer rank, never by object reference, and
each rank holds a small list of neighboring ranks.  Lists preserve
insertion order, which keeps the triangulation deterministic for a given
input.
"""


class VertexConnectivity(object):
    """
    Symmetric adjacency over n vertices.  connect() and disconnect()
    always update both endpoints, so if a links to b then b links to a.
    """
    def __init__(self,n):
        self.links=[ [] for _ in range(n) ]

    def __len__(self):
        return len(self.links)

    def connect(self,a,b):
        """ Idempotent - connecting an existing pair is a no-op.
        """
        if a==b:
            raise ValueError("Cannot connect vertex %d to itself"%a)
        if b in self.links[a]:
            return
        self.links[a].append(b)
        self.links[b].append(a)

    def disconnect(self,a,b):
        self.links[a].remove(b)
        self.links[b].remove(a)

    def disconnect_all(self,a):
        for b in self.links[a]:
            self.links[b].remove(a)
        self.links[a]=[]

    def is_connected(self,a,b):
        return b in self.links[a]

    def neighbors(self,a):
        # copy, so callers can disconnect while iterating
        return list(self.links[a])

    def degree(self,a):
        return len(self.links[a])

    def common_neighbor(self,a,b,exclude=None):
        """
        First vertex other than exclude which is connected to both a and b,
        or None.
        """
        for c in self.links[a]:
            if c==exclude:
                continue
            if b in self.links[c]:
                return c
        return None

    def common_neighbors(self,a,b):
        return [c for c in self.links[a] if b in self.links[c]]

    def edges(self):
        """ Each undirected edge once, as (lower rank, higher rank)
        """
        for a,nbrs in enumerate(self.links):
            for b in nbrs:
                if b>a:
                    yield (a,b)

    def Nedges(self):
        return sum(len(nbrs) for nbrs in self.links)//2
