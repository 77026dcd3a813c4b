"""
Force constraint edges into an existing triangulation.

For each missing edge curr-targ, walk the channel of triangles crossed by
the segment, recording the vertices to the left and to the right of it.
The crossing edges are removed, the constraint is connected, and the
two pseudo-polygons on either side are re-triangulated.
"""
import logging

from ..spatial.predicates import (orientation, relative_angle, subtended_angle,
                                  segments_cross)
from .errors import (DegenerateGeometryError, IntersectingConstraints,
                     ConstraintCollinearNode)

log=logging.getLogger(__name__)


def seed_chains(xy,con,curr,targ):
    """
    The neighbors of curr on either side of the ray curr->targ which are
    angularly nearest to it.  These bracket the first triangle crossed.
    """
    l_con=r_con=None
    l_angle=10.0
    r_angle=-10.0

    for j in con.neighbors(curr):
        angle=relative_angle(xy[curr],xy[targ],xy[j])
        if angle>0.0:
            if angle<l_angle:
                l_angle=angle
                l_con=j
        else:
            if angle==0.0:
                # j is not targ, and edges can't pass through targ,
                # so j is on the segment.
                raise ConstraintCollinearNode("Constraint runs through a node",
                                              node=j,nodes=[curr,targ])
            if angle>r_angle:
                r_angle=angle
                r_con=j
    return l_con,r_con

def opposite_vertex(xy,con,a,b,behind):
    """
    a,b: endpoints of an edge being crossed
    behind: the third vertex of the triangle we came from.

    returns the third vertex of the triangle on the far side of a-b,
    or None.  Of the common neighbors on the far side, that is the one
    angularly nearest to a->b as seen from a.
    """
    side=orientation(xy[a],xy[b],xy[behind])
    best=None
    best_angle=None
    for c in con.common_neighbors(a,b):
        if c==behind:
            continue
        if orientation(xy[a],xy[b],xy[c])*side>=0:
            continue
        angle=abs(relative_angle(xy[a],xy[b],xy[c]))
        if best is None or angle<best_angle:
            best=c
            best_angle=angle
    return best

def walk_channel(xy,con,curr,targ,constrained=()):
    """
    Trace the segment curr->targ through the triangulation.

    constrained: collection of (a,b) rank pairs, a<b, which may not be
    crossed.

    returns left_chain,right_chain: the vertices on either side of the
    segment in walk order, excluding curr and targ.
    """
    l_con,r_con=seed_chains(xy,con,curr,targ)
    if l_con is None or r_con is None:
        raise DegenerateGeometryError("No triangle at %d in direction of %d"%(curr,targ),
                                      nodes=[curr,targ])

    left_chain=[l_con]
    right_chain=[r_con]
    behind=curr

    # each step crosses one edge, so can't take more than the number
    # of edges.
    for _ in range(con.Nedges()+1):
        edge=(min(l_con,r_con),max(l_con,r_con))
        if edge in constrained:
            raise IntersectingConstraints("Constraint %d-%d intersects a constraint"%(curr,targ),
                                          edge=edge,nodes=[curr,targ])

        nxt=opposite_vertex(xy,con,l_con,r_con,behind)
        if nxt is None:
            raise DegenerateGeometryError("Walk from %d to %d left the triangulation"%(curr,targ),
                                          nodes=[curr,targ])
        if nxt==targ:
            return left_chain,right_chain

        side=orientation(xy[curr],xy[targ],xy[nxt])
        if side>0:
            behind=l_con
            l_con=nxt
            left_chain.append(nxt)
        elif side<0:
            behind=r_con
            r_con=nxt
            right_chain.append(nxt)
        else:
            raise ConstraintCollinearNode("Constraint runs through a node",
                                          node=nxt,nodes=[curr,targ])
    raise DegenerateGeometryError("Walk from %d to %d did not terminate"%(curr,targ),
                                  nodes=[curr,targ])

def retriangulate(xy,con,chain,lo,hi,side):
    """
    Triangulate the pseudo-polygon chain[lo:hi+1], closed by the existing
    edge chain[lo]-chain[hi].  side is the orientation of the interior
    vertices relative to chain[lo]->chain[hi].

    The apex is the interior vertex subtending the largest angle over the
    base, so that no other vertex of the polygon falls in the circumcircle
    of the new triangle.
    """
    if hi-lo<2:
        return
    a=xy[chain[lo]]
    b=xy[chain[hi]]

    best=None
    best_angle=-1.0
    fallback=None
    fallback_angle=-1.0
    for i in range(lo+1,hi):
        c=xy[chain[i]]
        angle=subtended_angle(a,b,c)
        if orientation(a,b,c)==side:
            if angle>best_angle:
                best=i
                best_angle=angle
        elif angle>fallback_angle:
            fallback=i
            fallback_angle=angle
    if best is None:
        log.warning("Channel polygon %s has no vertex on its own side"%(chain[lo:hi+1],))
        best=fallback

    con.connect(chain[lo],chain[best])
    con.connect(chain[best],chain[hi])
    retriangulate(xy,con,chain,lo,best,side)
    retriangulate(xy,con,chain,best,hi,side)

def insert_constraint(xy,con,curr,targ,constrained=()):
    """
    Make sure ranks curr and targ are connected, retriangulating the
    crossed channel if necessary.

    returns True if the triangulation was modified.
    """
    if con.is_connected(curr,targ):
        return False

    left_chain,right_chain=walk_channel(xy,con,curr,targ,constrained)
    log.debug("constraint %d-%d: left chain %s, right chain %s"%(curr,targ,
                                                                left_chain,right_chain))

    # remove the edges crossing the constraint
    p_curr=xy[curr]
    p_targ=xy[targ]
    for l in left_chain:
        for r in right_chain:
            if ( con.is_connected(l,r) and
                 segments_cross(p_curr,p_targ,xy[l],xy[r]) ):
                con.disconnect(l,r)

    con.connect(curr,targ)

    left_chain=[curr]+left_chain+[targ]
    right_chain=[curr]+right_chain+[targ]
    retriangulate(xy,con,left_chain,0,len(left_chain)-1,1)
    retriangulate(xy,con,right_chain,0,len(right_chain)-1,-1)
    return True

def apply_constraints(xy,con,rank_pairs):
    """
    Insert each (curr,targ) rank pair, in order.  Later constraints may not
    cross earlier ones.

    returns the set of constrained edges as (low rank, high rank) tuples.
    """
    constrained=set()
    for curr,targ in rank_pairs:
        curr=int(curr)
        targ=int(targ)
        if insert_constraint(xy,con,curr,targ,constrained):
            log.debug("inserted constraint %d-%d"%(curr,targ))
        constrained.add( (min(curr,targ),max(curr,targ)) )
    return constrained
