import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from dcdelaunay import Triangulation


def sample():
    pnts=np.random.RandomState(0).random_sample( (20,2) )
    return Triangulation(points=pnts,constraints=[[0,1]],triangulate=True)

def test_plot_nodes():
    t=sample()
    fig,ax=plt.subplots()
    t.plot_nodes(ax=ax,labeler='id')
    t.plot_nodes(ax=ax,labeler=lambda n,x: "%.2f"%x[0],sizes=5)
    plt.close(fig)

def test_plot_edges():
    t=sample()
    fig,ax=plt.subplots()
    lcoll=t.plot_edges(ax=ax,values=t.edge_constrained_mask().astype(np.float64))
    assert len(lcoll.get_segments())==t.Nedges()
    lcoll=t.plot_edges(ax=ax,mask=t.edge_constrained_mask(),color='r',lw=2)
    assert len(lcoll.get_segments())==1
    plt.close(fig)

def test_plot_cells():
    t=sample()
    fig,ax=plt.subplots()
    pcoll=t.plot_cells(ax=ax,values=np.arange(t.Ncells()))
    assert len(pcoll.get_paths())==t.Ncells()
    plt.close(fig)
