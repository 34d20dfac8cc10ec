import networkx as nx
from typing import List, Optional
from roadchase.domain.models import Lane

class RoadLayout:
    """Parallel lanes as nodes of an adjacency graph; edges join lanes a car can change between."""

    def __init__(self, x_positions: List[float]):
        self.graph = nx.Graph()
        for index, x in enumerate(x_positions):
            self.graph.add_node(index, x=float(x))
        for index in range(len(x_positions) - 1):
            self.graph.add_edge(index, index + 1, width=abs(x_positions[index + 1] - x_positions[index]))

    @property
    def lane_count(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def centre_lane(self) -> int:
        return self.lane_count // 2

    def lanes(self) -> List[Lane]:
        return [Lane(index=i, x=self.graph.nodes[i]["x"]) for i in sorted(self.graph.nodes)]

    def is_valid(self, lane: int) -> bool:
        return self.graph.has_node(lane)

    def lane_x(self, lane: int) -> float:
        return self.graph.nodes[lane]["x"]

    def clamp(self, lane: int) -> int:
        return max(0, min(self.lane_count - 1, lane))

    def lane_at(self, x: float) -> int:
        """Lane whose centre line is nearest to a lateral coordinate."""
        return min(self.graph.nodes, key=lambda i: (abs(x - self.graph.nodes[i]["x"]), i))

    def next_lane_toward(self, source: int, target: int) -> Optional[int]:
        """One lane step from source on the way to target, or None when already there."""
        if source == target:
            return None
        path = nx.shortest_path(self.graph, source, target)
        return path[1]
