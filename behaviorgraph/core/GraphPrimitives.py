from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple


# Connections reference ports by index, exactly as the editor stores them.
# Whether an edge is flow or data is never stored; it is derived from the
# endpoint definitions at compile time.
class Connection(NamedTuple):
    from_node: str
    from_port: int
    to_node: str
    to_port: int

    def __repr__(self):
        return f"Connection({self.from_node}[{self.from_port}] -> {self.to_node}[{self.to_port}])"


@dataclass(frozen=True, eq=False)
class NodeInstance:
    id: str
    type: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    value: Any = None
    dropdown_value: Optional[str] = None
    expose_property: bool = False
    group_name: Optional[str] = None
    selected_property: Optional[str] = None
    label: Optional[str] = None
    # per-port literal overrides: input port name -> JSON value
    literals: Mapping[str, Any] = field(default_factory=dict)
    # nested graph, only for group nodes
    children: Optional["Graph"] = None

    def __repr__(self):
        return f"NodeInstance({self.id}:{self.type})"


@dataclass(eq=False)
class Graph:
    nodes: Tuple[NodeInstance, ...] = ()
    connections: Tuple[Connection, ...] = ()

    _by_id: Dict[str, NodeInstance] = field(init=False, repr=False)
    _incoming: Dict[Tuple[str, int], List[Connection]] = field(init=False, repr=False)
    _outgoing: Dict[Tuple[str, int], List[Connection]] = field(init=False, repr=False)

    def __post_init__(self):
        self.nodes = tuple(self.nodes)
        self.connections = tuple(self.connections)

        self._by_id = {}
        for node in self.nodes:
            if node.id in self._by_id:
                raise ValueError(f"Node with id '{node.id}' already exists in the graph")
            self._by_id[node.id] = node

        self._incoming = defaultdict(list)
        self._outgoing = defaultdict(list)
        for conn in self.connections:
            self._incoming[(conn.to_node, conn.to_port)].append(conn)
            self._outgoing[(conn.from_node, conn.from_port)].append(conn)

    # ── Queries ──────────────────────────────────────────────────────────

    def node(self, node_id: str) -> Optional[NodeInstance]:
        return self._by_id.get(node_id)

    def incoming(self, node_id: str, port_index: int) -> List[Connection]:
        return self._incoming.get((node_id, port_index), [])

    def outgoing(self, node_id: str, port_index: int) -> List[Connection]:
        return self._outgoing.get((node_id, port_index), [])

    def __len__(self):
        return len(self.nodes)
