"""
Initial triangulation: chop the rank-sorted vertices into small runs
which are trivially triangulated, to be merged pairwise by merge.py.
"""
import logging

from ..spatial.predicates import orientation

log=logging.getLogger(__name__)


def connect_triple(xy,con,first):
    """ connect first,first+1,first+2 as a triangle, or as a path
    if they are collinear.
    """
    a,b,c=first,first+1,first+2
    con.connect(a,b)
    con.connect(b,c)
    if orientation(xy[a],xy[b],xy[c])!=0:
        con.connect(a,c)

def initial_stripes(xy,con):
    """
    xy: list of (x,y), sorted by x then y.
    con: VertexConnectivity, same length as xy.

    Runs are groups of 2 or 3 consecutive vertices, except that vertices
    sharing an x coordinate are never split across runs.  A vertical run
    is connected as a path, and fanned to the neighboring vertex which
    completes it (the vertex before for a run starting mid-group, or the
    next vertex with a different x).

    returns the list of ranks at which each run starts, terminated by
    len(xy).
    """
    N=len(xy)
    sub_seq=[]
    first=-1
    current=0

    while current<N:
        if first==-1:
            sub_seq.append(current)
            first=current
        elif current-first==3:
            if xy[current-1][0]==xy[current][0]:
                # the last two share x - keep them for the next run
                con.connect(first,first+1)
                current-=2
            else:
                connect_triple(xy,con,first)
                current-=1
            first=-1
        elif current-first==2:
            if xy[first+1][0]==xy[current][0]:
                # vertical run starting at first+1, fanned from first
                while current<N and xy[first+1][0]==xy[current][0]:
                    current+=1
                current-=1
                for m in range(first+1,current):
                    con.connect(first,m)
                    con.connect(m,m+1)
                con.connect(first,current)
                first=-1
        elif xy[first][0]==xy[current][0]:
            # vertical run starting at first
            while current<N and xy[first][0]==xy[current][0]:
                current+=1

            if current==N:
                current-=1
                for m in range(first,current):
                    con.connect(m,m+1)
            else:
                # include the next vertex, and fan to it.
                for m in range(first,current-1):
                    con.connect(m,m+1)
                    con.connect(m,current)
                con.connect(current-1,current)
            first=-1
        current+=1

    if first!=-1:
        leftover=current-first
        if leftover==3:
            connect_triple(xy,con,first)
        elif leftover==2:
            con.connect(first,first+1)

    sub_seq.append(N)
    log.debug("Initial triangulation: %d runs for %d vertices"%(len(sub_seq)-1,N))
    return sub_seq
