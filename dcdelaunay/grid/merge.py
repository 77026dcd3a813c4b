"""
Divide and conquer merge of the initial runs.

Adjacent sub-triangulations [left,middle) and [middle,right) are sewn
together starting from their lower common tangent, walking upwards and
pruning edges which fail the in-circle test.  Widths double until the
whole sequence is one triangulation.
"""
import logging
import math

from ..spatial.predicates import (is_delaunay, orientation, relative_angle)

log=logging.getLogger(__name__)


def lower_tangent(xy,left,middle,right):
    """
    Find the base edge for merging ranks [left,middle) with [middle,right).
    Starts from the lowest vertex on each side, then alternately sweeps
    each whole side for a vertex below the current base, until neither
    end moves.  Among collinear vertices the ends nearest each other
    are kept.

    returns (low_l,low_r)
    """
    low_l=left
    for v in range(left+1,middle):
        if xy[low_l][1]>=xy[v][1]:
            low_l=v
    low_r=middle
    for v in range(middle+1,right):
        if xy[low_r][1]>xy[v][1]:
            low_r=v

    for _ in range(right-left+1):
        old=(low_l,low_r)
        for v in range(left,middle):
            o=orientation(xy[low_l],xy[low_r],xy[v])
            if o<0 or (o==0 and v>low_l):
                low_l=v
        for v in range(middle,right):
            o=orientation(xy[low_l],xy[low_r],xy[v])
            if o<0 or (o==0 and v<low_r):
                low_r=v
        if (low_l,low_r)==old:
            break
    else:
        log.warning("Base edge search for [%d,%d,%d) did not settle"%(left,middle,right))
    return low_l,low_r

def select_candidate(xy,con,pivot,low_l,low_r,cands):
    """
    cands: [(angle,rank),...] neighbors of pivot above the base edge.
    Sorts them by angle, then drops (and disconnects) the leading
    candidate while the following one falls inside the circumcircle of
    the base and the leading candidate.

    returns the surviving candidate rank, or None.
    """
    if not cands:
        return None
    cands.sort(key=lambda c: c[0])

    i=0
    while i+1<len(cands):
        c1=cands[i][1]
        c2=cands[i+1][1]
        if is_delaunay(xy[low_l],xy[low_r],xy[c1],xy[c2]):
            break
        con.disconnect(pivot,c1)
        i+=1
    return cands[i][1]

def left_candidate(xy,con,low_l,low_r,middle,theta):
    cands=[]
    max_angle=math.pi-theta
    for j in con.neighbors(low_l):
        if j>=middle:
            continue
        angle=relative_angle(xy[low_l],xy[low_r],xy[j])
        if 0.0<=angle<=max_angle:
            cands.append( (angle,j) )
    return select_candidate(xy,con,low_l,low_l,low_r,cands)

def right_candidate(xy,con,low_l,low_r,middle,theta):
    cands=[]
    max_angle=math.pi-theta
    for j in con.neighbors(low_r):
        if j<middle:
            continue
        # measured clockwise from the base, so that both sides
        # count angles upwards from the base edge
        angle=-relative_angle(xy[low_r],xy[low_l],xy[j])
        if 0.0<=angle<=max_angle:
            cands.append( (angle,j) )
    return select_candidate(xy,con,low_r,low_l,low_r,cands)

def merge_pair(xy,con,left,middle,right,theta):
    """
    Sew the triangulations of [left,middle) and [middle,right) together.
    """
    low_l,low_r=lower_tangent(xy,left,middle,right)
    log.debug("merge [%d,%d,%d): base edge %d-%d"%(left,middle,right,low_l,low_r))

    while True:
        l_cand=left_candidate(xy,con,low_l,low_r,middle,theta)
        r_cand=right_candidate(xy,con,low_l,low_r,middle,theta)

        con.connect(low_l,low_r)

        if l_cand is not None:
            if r_cand is not None:
                if is_delaunay(xy[low_l],xy[low_r],xy[l_cand],xy[r_cand]):
                    low_l=l_cand
                else:
                    low_r=r_cand
            else:
                low_l=l_cand
        elif r_cand is not None:
            low_r=r_cand
        else:
            break

def merge_stripes(xy,con,sub_seq,theta=1e-6):
    """
    sub_seq: run offsets from initial_stripes(), terminated by len(xy).
    Merges runs pairwise, doubling the width each pass.
    """
    num_sub_seq=len(sub_seq)-1

    n=2
    while (n>>1)<num_sub_seq:
        log.debug("merge pass: width %d of %d runs"%(n,num_sub_seq))
        for m in range(0,num_sub_seq,n):
            if m+n//2>=num_sub_seq:
                break
            left=sub_seq[m]
            middle=sub_seq[m+n//2]
            right=sub_seq[min(m+n,num_sub_seq)]
            merge_pair(xy,con,left,middle,right,theta)
        n<<=1
