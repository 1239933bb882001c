from .grid_generator import GridSimulator, LoadSource, SimNode
from .load_balancer import LoadBalancer

__all__ = ['GridSimulator', 'LoadSource', 'SimNode', 'LoadBalancer']
