# Divide and conquer Delaunay triangulation, with constraint edges forced
# in after the fact.
#
# Vertices are sorted by x (then y), chopped into small runs which are
# triangulated directly (stripes.py), and runs are merged pairwise
# (merge.py).  Constraints are then inserted by retriangulating the
# channel of triangles they cross (constraints.py).
import logging

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection, PolyCollection
from matplotlib import tri as mtri
from shapely import geometry
from shapely.geometry.base import BaseGeometry

from ..utils import set_keywords, circular_pairs, signed_area
from ..spatial import predicates
from . import stripes, merge
from .constraints import apply_constraints
from .adjacency import VertexConnectivity
from .errors import (TriangulationError, InvalidInputError, DuplicateVertex,
                     DegenerateGeometryError, BadConstraint,
                     IntersectingConstraints, ConstraintCollinearNode)

log=logging.getLogger(__name__)


def as_pairs(values,name):
    """
    Coerce an [N,2] array-like, or a flat sequence of even length, to an
    [N,2] array.
    """
    arr=np.asarray(values)
    if arr.ndim==1:
        if len(arr)%2:
            raise InvalidInputError("%s buffer has odd length %d"%(name,len(arr)))
        arr=arr.reshape([-1,2])
    elif arr.ndim!=2 or arr.shape[1]!=2:
        raise InvalidInputError("%s must be [N,2] or a flat buffer, got shape %s"%(name,arr.shape))
    return arr


class Triangulation(object):
    """
    Delaunay triangulation of a fixed set of points, optionally
    with constraint edges.

    t=Triangulation(points=[[0,0],[1,0],[1,1],[0,1]],
                    constraints=[[0,2]],
                    triangulate=True)
    t.edges()     # [M,2] indices into points
    t.triangles() # [T,3] indices into points, counter-clockwise

    All outputs refer to vertices by their index in the original
    points array.  Internally vertices are referred to by rank,
    their position after sorting by x then y.
    """
    # Angular tolerance for rejecting merge candidates which double back
    # on the base edge.
    theta=1e-6
    # enables [expensive] checks after triangulate()
    post_check=False

    # local exception types
    TriangulationError=TriangulationError
    InvalidInputError=InvalidInputError
    DuplicateVertex=DuplicateVertex
    DegenerateGeometryError=DegenerateGeometryError
    BadConstraint=BadConstraint
    IntersectingConstraints=IntersectingConstraints
    ConstraintCollinearNode=ConstraintCollinearNode

    def __init__(self,points=None,constraints=None,triangulate=False,**kwargs):
        """
        points: [N,2] coordinates, or flat [x0,y0,x1,y1,...]
        constraints: [M,2] indices into points which must end up connected
        triangulate: if True, triangulate immediately.
        remaining keywords override class attributes, e.g. theta, post_check
        """
        self.init_log()
        self.points=np.zeros( (0,2), np.float64)
        self.rank_to_index=np.zeros(0,np.int32)
        self.index_to_rank=np.zeros(0,np.int32)
        self.xy=[]
        self.constraints=None
        self.con=None
        self.constrained=set()
        set_keywords(self,kwargs)

        if points is not None:
            self.set_vertices(points)
        if constraints is not None:
            self.set_constraints(constraints)
        if triangulate:
            self.triangulate()

    def init_log(self):
        self.log = logging.getLogger(self.__class__.__name__)

    def __repr__(self):
        return "<%s: %d nodes, %s>"%(self.__class__.__name__,self.Nnodes(),
                                     "%d edges"%self.Nedges() if self.con is not None
                                     else "not triangulated")

    # Input
    def set_vertices(self,points):
        """
        Replace the point set.  Clears constraints and any previous
        triangulation.  Coincident points raise DuplicateVertex.
        """
        points=as_pairs(points,'vertices').astype(np.float64)
        if not np.all(np.isfinite(points)):
            bad=np.nonzero(~np.all(np.isfinite(points),axis=1))[0]
            raise InvalidInputError("Vertices must be finite, but %s are not"%list(bad))

        # sort by x, break ties with y.  lexsort keys are minor to major.
        order=np.lexsort( (points[:,1],points[:,0]) )
        sorted_points=points[order]

        if len(points)>1:
            dupe=np.all(sorted_points[1:]==sorted_points[:-1],axis=1)
            if np.any(dupe):
                i=np.nonzero(dupe)[0][0]
                nodes=[int(order[i]),int(order[i+1])]
                raise DuplicateVertex("Vertices %d and %d coincide at %s"%(nodes[0],nodes[1],
                                                                           sorted_points[i]),
                                      nodes=nodes)

        self.points=points
        self.rank_to_index=order
        self.index_to_rank=np.zeros(len(points),order.dtype)
        self.index_to_rank[order]=np.arange(len(points))
        # plain floats are much faster than numpy scalars in the inner loops
        self.xy=[tuple(p) for p in sorted_points.tolist()]

        self.constraints=None
        self.con=None
        self.constrained=set()
        return self

    def set_constraints(self,pairs):
        """
        pairs: [M,2] or flat buffer of vertex indices.  Each pair will be
        an edge of the triangulation.  Applied in order.
        """
        pairs=as_pairs(pairs,'constraints')
        if len(pairs) and not np.issubdtype(pairs.dtype,np.integer):
            as_int=pairs.astype(np.int64)
            if not np.all(as_int==pairs):
                raise InvalidInputError("Constraint indices must be integers")
            pairs=as_int
        pairs=pairs.astype(np.int64)
        self.check_constraints(pairs)
        self.constraints=pairs
        self.con=None
        self.constrained=set()
        return self

    def check_constraints(self,pairs):
        N=self.Nnodes()
        if len(pairs)==0:
            return
        if N==0:
            raise InvalidInputError("Constraints given, but there are no vertices")
        bad=np.nonzero( np.any( (pairs<0) | (pairs>=N), axis=1) )[0]
        if len(bad):
            raise InvalidInputError("Constraint %d (%s) is out of range for %d vertices"%(bad[0],
                                                                                      list(pairs[bad[0]]),N))
        loops=np.nonzero(pairs[:,0]==pairs[:,1])[0]
        if len(loops):
            raise InvalidInputError("Constraint %d connects vertex %d to itself"%(loops[0],pairs[loops[0],0]))

    # Triangulation
    def triangulate(self):
        """
        Run the full pipeline.  Fewer than 3 vertices is a no-op.
        Any constraint problem is raised before touching geometry, and
        a failure during constraint insertion leaves the object
        untriangulated.
        """
        N=self.Nnodes()
        self.con=None
        self.constrained=set()

        if self.constraints is not None:
            self.check_constraints(self.constraints)

        if N<3:
            self.log.info("Only %d vertices - nothing to triangulate"%N)
            return self

        con=VertexConnectivity(N)
        sub_seq=stripes.initial_stripes(self.xy,con)
        merge.merge_stripes(self.xy,con,sub_seq,theta=self.theta)

        constrained=set()
        if self.constraints is not None and len(self.constraints):
            rank_pairs=self.index_to_rank[self.constraints]
            try:
                constrained=apply_constraints(self.xy,con,rank_pairs)
            except DegenerateGeometryError as exc:
                self.log.warning("Constraint insertion failed: %s"%exc)
                raise

        self.con=con
        self.constrained=constrained
        self.log.info("Triangulated %d vertices: %d edges, %d constraints"%(N,con.Nedges(),
                                                                          len(constrained)))
        if self.post_check:
            self.check_global_delaunay()
            self.check_orientations()
            self.check_crossings()
        return self

    # Counts and queries
    def Nnodes(self):
        return len(self.points)
    def Nedges(self):
        if self.con is None:
            return 0
        return self.con.Nedges()
    def Ncells(self):
        return len(self.triangles())

    def node_to_nodes(self,n):
        """ neighbors of vertex n, as original indices
        """
        if self.con is None:
            return np.zeros(0,np.int32)
        r=self.index_to_rank[n]
        return self.rank_to_index[self.con.neighbors(r)]

    # Extraction
    def edges(self):
        """
        [M,2] array of vertex indices, each undirected edge once.
        Ordered by the rank of the first vertex.
        """
        if self.con is None:
            return np.zeros( (0,2), np.int32)
        result=[]
        for r in range(len(self.con)):
            for j in self.con.neighbors(r):
                if j>r:
                    result.append( (r,j) )
        return self.ranks_to_indices(result,2)

    def triangles(self):
        """
        [T,3] array of vertex indices, counter-clockwise.  Each triangle
        is found from its lowest ranked vertex, where the higher ranked
        neighbors, sorted by angle, give one triangle per consecutive pair.
        """
        if self.con is None:
            return np.zeros( (0,3), np.int32)
        xy=self.xy
        result=[]
        for r in range(len(self.con)-1):
            higher=[ (predicates.absolute_angle(xy[r],xy[j]),j)
                     for j in self.con.neighbors(r)
                     if j>r ]
            higher.sort()
            for (_,v1),(_,v2) in zip(higher[:-1],higher[1:]):
                if not self.con.is_connected(v1,v2):
                    continue
                if predicates.orientation(xy[r],xy[v1],xy[v2])<=0:
                    continue
                result.append( (r,v1,v2) )
        return self.ranks_to_indices(result,3)

    def ranks_to_indices(self,rank_tuples,width):
        if len(rank_tuples)==0:
            return np.zeros( (0,width), np.int32)
        return self.rank_to_index[ np.array(rank_tuples,np.int64) ]

    def constrained_edges(self):
        """ [M,2] vertex indices of the constraints which were inserted
        """
        return self.ranks_to_indices(sorted(self.constrained),2)

    def boundary_edges(self):
        """
        [M,2] vertex indices of edges with a triangle on only one side.
        For non-degenerate input this is the convex hull.  Edges of a
        triangulation with no triangles (collinear input) are all boundary.
        """
        counts={}
        for a,b in self.edges():
            counts[ (min(a,b),max(a,b)) ]=0
        for cell in self.triangles():
            for a,b in circular_pairs(cell):
                counts[ (min(a,b),max(a,b)) ]+=1
        bdry=[ab for ab in counts if counts[ab]<2]
        if not bdry:
            return np.zeros( (0,2), np.int32)
        return np.array(bdry)

    # Checks
    def check_global_delaunay(self,skip_constrained=True):
        """
        Brute force test of every triangle against every vertex.
        skip_constrained: ignore triangles which have a constrained edge.

        returns [ (triangle index, vertex index), ...] for vertices which
        fall strictly inside a circumcircle.
        """
        bad_checks=[]
        points=self.points
        cells=self.triangles()
        constrained_idx=set( (min(a,b),max(a,b)) for a,b in self.constrained_edges() )

        for c,nodes in enumerate(cells):
            if skip_constrained and constrained_idx:
                if any( (min(a,b),max(a,b)) in constrained_idx
                        for a,b in circular_pairs(nodes) ):
                    continue
            pnts=points[nodes]
            d=points
            # vectorized incircle against all vertices
            adx=pnts[0,0]-d[:,0] ; ady=pnts[0,1]-d[:,1]
            bdx=pnts[1,0]-d[:,0] ; bdy=pnts[1,1]-d[:,1]
            cdx=pnts[2,0]-d[:,0] ; cdy=pnts[2,1]-d[:,1]
            det=( (adx**2+ady**2)*(bdx*cdy-cdx*bdy)
                  + (bdx**2+bdy**2)*(cdx*ady-adx*cdy)
                  + (cdx**2+cdy**2)*(adx*bdy-bdx*ady) )
            # relative tolerance, since cocircular points are legal
            scale=np.abs(pnts-pnts.mean(axis=0)).max()
            tol=1e-10*scale**4
            det[nodes]=0
            for n in np.nonzero(det>tol)[0]:
                msg="Node %d is inside the circumcircle of cell %d (%d,%d,%d)"%(n,c,
                                                                                nodes[0],nodes[1],nodes[2])
                self.log.error(msg)
                bad_checks.append( (c,n) )
        return bad_checks

    def check_orientations(self):
        """
        Checks all triangles for proper CCW orientation,
        return a list of triangle indexes of failures.
        """
        bad_cells=[]
        for c,nodes in enumerate(self.triangles()):
            if signed_area(self.points[nodes])<=0:
                self.log.error("Cell %d (%d,%d,%d) is not CCW"%(c,nodes[0],nodes[1],nodes[2]))
                bad_cells.append(c)
        return bad_cells

    def check_crossings(self):
        """
        Brute force test for edges which cross each other.
        returns [ (edge index, edge index), ...]
        """
        edges=self.edges()
        segs=self.points[edges]
        bad=[]
        for j in range(len(edges)):
            for k in range(j+1,len(edges)):
                if predicates.segments_cross(segs[j,0],segs[j,1],segs[k,0],segs[k,1]):
                    self.log.error("Edges %s and %s cross"%(list(edges[j]),list(edges[k])))
                    bad.append( (j,k) )
        return bad

    # Plotting and export
    def plot_nodes(self,ax=None,labeler=None,sizes=20,**kwargs):
        """ plot nodes as scatter
        labeler: callable taking (node index, coordinates), return string.
          'id' labels with the index.
        """
        ax=ax or plt.gca()
        if labeler is not None:
            if labeler=='id':
                labeler=lambda n,x: str(n)
            for n,x in enumerate(self.points):
                ax.text(x[0],x[1],labeler(n,x))
        return ax.scatter(self.points[:,0],self.points[:,1],sizes,**kwargs)

    def plot_edges(self,ax=None,values=None,mask=None,lw=0.8,**kwargs):
        """
        plot edges as a LineCollection.
        values: optional scalar per edge, as ordered by edges()
        mask: optional bitmask over edges()
        By default constrained edges are not distinguished - pass
        values=t.edge_constrained_mask() to highlight them.
        """
        ax=ax or plt.gca()
        edges=self.edges()
        if mask is not None:
            edges=edges[mask]
            if values is not None:
                values=np.asarray(values)[mask]
        segs=self.points[edges]
        if values is not None:
            kwargs['array']=np.asarray(values)
        lcoll=LineCollection(segs,lw=lw,**kwargs)
        ax.add_collection(lcoll)
        if len(self.points):
            ax.update_datalim(self.points)
            ax.autoscale_view()
        return lcoll

    def edge_constrained_mask(self):
        constrained_idx=set( (min(a,b),max(a,b)) for a,b in self.constrained_edges() )
        return np.array( [ (min(a,b),max(a,b)) in constrained_idx
                           for a,b in self.edges() ], bool)

    def plot_cells(self,ax=None,values=None,**kwargs):
        """
        plot triangles as a PolyCollection.
        values: optional scalar per triangle, as ordered by triangles()
        """
        ax=ax or plt.gca()
        polys=self.points[self.triangles()]
        if values is not None:
            kwargs['array']=np.asarray(values)
        pcoll=PolyCollection(polys,**kwargs)
        ax.add_collection(pcoll)
        if len(self.points):
            ax.update_datalim(self.points)
            ax.autoscale_view()
        return pcoll

    def to_mpl_triangulation(self):
        """ matplotlib.tri.Triangulation with the same triangles,
        suitable for tricontour, LinearTriInterpolator, etc.
        """
        cells=self.triangles()
        if len(cells)==0:
            raise DegenerateGeometryError("No triangles to export")
        return mtri.Triangulation(self.points[:,0],self.points[:,1],cells)

    def cell_polygons(self):
        """ list of shapely Polygons, one per triangle
        """
        return [geometry.Polygon(self.points[nodes])
                for nodes in self.triangles()]

    @classmethod
    def from_linestrings(cls,lines,closed=False,**kwargs):
        """
        Build a constrained triangulation from polylines.
        lines: shapely LineStrings, or [N,2] coordinate sequences.  Each
          segment becomes a constraint.  Coincident coordinates, within or
          across lines, become a single vertex.
        closed: also constrain last point back to first point of each line.
        remaining keywords are passed to the constructor.
        """
        X=[]
        edges=[]
        index={} # (x,y) => vertex index

        def add_point(xy):
            key=(float(xy[0]),float(xy[1]))
            if key not in index:
                index[key]=len(X)
                X.append(key)
            return index[key]

        for line in lines:
            if isinstance(line,BaseGeometry):
                coords=np.array(line.coords)
            else:
                coords=np.asarray(line,np.float64)
            coords=coords[:,:2]
            nodes=[]
            for xy in coords:
                n=add_point(xy)
                if nodes and nodes[-1]==n:
                    log.warning("Dropping repeated point %s"%(X[n],))
                    continue
                nodes.append(n)
            if closed and len(nodes)>2 and nodes[0]!=nodes[-1]:
                nodes.append(nodes[0])
            for a,b in zip(nodes[:-1],nodes[1:]):
                edges.append( [a,b] )

        kwargs.setdefault('triangulate',True)
        return cls(points=np.array(X,np.float64).reshape([-1,2]),
                   constraints=np.array(edges,np.int64).reshape([-1,2]),
                   **kwargs)
