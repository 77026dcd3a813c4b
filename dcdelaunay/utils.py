import itertools

import numpy as np


def circular_pairs(iterable):
    """
    like pairwise, but closes the loop.
    s -> (s0,s1), (s1,s2), (s2, s3), ..., (sN,s0)
    """
    a, b = itertools.tee(iterable)
    b = itertools.cycle(b)
    next(b, None)
    return zip(a, b)

def signed_area(points):
    points=np.asarray(points)
    i = np.arange(points.shape[0])
    ip1 = (i+1)%(points.shape[0])
    return 0.5*(points[i,0]*points[ip1,1] - points[ip1,0]*points[i,1]).sum()

def set_keywords(obj,kw):
    """
    Utility for __init__ methods to update object state with
    keyword arguments.  Checks that the attributes already
    exist, to avoid spelling mistakes.  Uses getattr and
    setattr for compatibility with properties.
    """
    for k in kw:
        try:
            getattr(obj,k)
        except AttributeError:
            raise Exception("Setting attribute %s failed because it doesn't exist on %s"%(k,obj))
        setattr(obj,k,kw[k])
