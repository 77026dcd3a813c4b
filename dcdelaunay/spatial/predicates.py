# Plain floating point geometric predicates for the divide and conquer
# triangulation.  Points are anything indexable as p[0],p[1], typically
# (x,y) tuples of floats.
#
# These are NOT robust.  No attempt is made to detect roundoff, and
# callers are expected to treat degenerate results (zero orientation,
# points on a circumcircle) as legal.
import math

def orientation(a,b,c):
    """
    returns 1 if a,b,c are counter-clockwise, -1 if clockwise,
    0 if collinear.
    """
    det=(b[0]-a[0])*(c[1]-a[1]) - (b[1]-a[1])*(c[0]-a[0])
    if det>0:
        return 1
    elif det<0:
        return -1
    return 0

def incircle(a,b,c,d):
    """
    a,b,c: triangle in counter-clockwise order
    returns a value >0 if d is strictly inside the circumcircle of abc,
    <0 if outside, and 0 if on the circle (including the case of all
    four points collinear).
    """
    adx=a[0]-d[0] ; ady=a[1]-d[1]
    bdx=b[0]-d[0] ; bdy=b[1]-d[1]
    cdx=c[0]-d[0] ; cdy=c[1]-d[1]

    alift=adx*adx + ady*ady
    blift=bdx*bdx + bdy*bdy
    clift=cdx*cdx + cdy*cdy

    return ( alift*(bdx*cdy - cdx*bdy)
             + blift*(cdx*ady - adx*cdy)
             + clift*(adx*bdy - bdx*ady) )

def is_delaunay(a,b,c,d):
    """
    True if d lies outside or on the circumcircle of the
    counter-clockwise triangle a,b,c, i.e. edge a-b is not illegal
    with respect to d.  All-collinear input is legal.
    """
    return incircle(a,b,c,d)<=0

def relative_angle(origin,ref,p):
    """
    signed angle in (-pi,pi] of the vector origin->p, measured CCW
    from the vector origin->ref.  Same as the argument of the
    complex ratio (p-origin)/(ref-origin).
    """
    rx=ref[0]-origin[0] ; ry=ref[1]-origin[1]
    px=p[0]-origin[0] ; py=p[1]-origin[1]
    return math.atan2(rx*py - ry*px, rx*px + ry*py)

def absolute_angle(origin,p):
    return math.atan2(p[1]-origin[1],p[0]-origin[0])

def subtended_angle(a,b,c):
    """ unsigned angle at c between c->a and c->b, in [0,pi]
    """
    return abs(relative_angle(c,a,b))

def segments_cross(a,b,c,d):
    """
    True if segment a-b and segment c-d properly cross, i.e. intersect
    at a single point interior to both.  Shared endpoints and
    collinear overlaps do not count.
    """
    o1=orientation(a,b,c)
    o2=orientation(a,b,d)
    if o1*o2>=0:
        return False
    o3=orientation(c,d,a)
    o4=orientation(c,d,b)
    return o3*o4<0
