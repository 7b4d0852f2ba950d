"""
依赖图基础类定义

节点（WorkNode）代表一次网络请求或一段CPU任务，
依赖图（DependencyGraph）在构造后不可变。
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Tuple


class NodeType(Enum):
    """节点类型枚举"""
    NETWORK = "network"
    CPU = "cpu"


@dataclass(frozen=True)
class ChildEvent:
    """CPU任务内部的子事件（如 Layout、Paint）"""
    name: str


@dataclass(frozen=True, eq=False)
class WorkNode:
    """依赖图中的工作节点

    按对象身份进行哈希，字段相同的两个节点仍是不同的键。
    """
    node_id: str
    node_type: NodeType
    start_time_ms: float = 0.0          # 实际trace中观测到的开始时间
    duration_ms: float = 0.0            # CPU任务的基础耗时
    transfer_size_bytes: int = 0        # 网络请求的传输大小
    render_blocking: bool = False       # 是否阻塞渲染
    child_events: Tuple[ChildEvent, ...] = ()

    @property
    def is_cpu(self) -> bool:
        return self.node_type is NodeType.CPU

    def has_child_event(self, name: str) -> bool:
        """是否包含指定名称的子事件"""
        return any(evt.name == name for evt in self.child_events)


class DependencyGraph:
    """
    不可变的有向无环依赖图

    边 (a, b) 表示 b 依赖 a，即 a 完成后 b 才能开始。
    """

    def __init__(self, nodes: Iterable[WorkNode],
                 edges: Iterable[Tuple[WorkNode, WorkNode]] = ()):
        self._nodes: List[WorkNode] = list(nodes)
        self._by_id: Dict[str, WorkNode] = {}
        self._dependencies: Dict[WorkNode, List[WorkNode]] = {}
        self._dependents: Dict[WorkNode, List[WorkNode]] = {}

        for node in self._nodes:
            if node.node_id in self._by_id:
                raise ValueError(f"Duplicate node id: {node.node_id}")
            self._by_id[node.node_id] = node
            self._dependencies[node] = []
            self._dependents[node] = []

        for dependency, dependent in edges:
            if dependency not in self._dependencies or dependent not in self._dependencies:
                raise ValueError(
                    f"Edge references unknown node: {dependency.node_id} -> {dependent.node_id}"
                )
            self._dependencies[dependent].append(dependency)
            self._dependents[dependency].append(dependent)

    @property
    def nodes(self) -> List[WorkNode]:
        return list(self._nodes)

    @property
    def edges(self) -> List[Tuple[WorkNode, WorkNode]]:
        return [
            (dependency, node)
            for node in self._nodes
            for dependency in self._dependencies[node]
        ]

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return node in self._dependencies

    def get_node(self, node_id: str) -> WorkNode:
        """按ID获取节点"""
        if node_id not in self._by_id:
            raise ValueError(f"Unknown node id: {node_id}")
        return self._by_id[node_id]

    def dependencies(self, node: WorkNode) -> List[WorkNode]:
        return list(self._dependencies[node])

    def dependents(self, node: WorkNode) -> List[WorkNode]:
        return list(self._dependents[node])

    def topological_order(self) -> List[WorkNode]:
        """
        Kahn算法拓扑排序，同层节点保持插入顺序

        Raises:
            ValueError: 图中存在环
        """
        in_degree = {node: len(self._dependencies[node]) for node in self._nodes}
        queue = deque(node for node in self._nodes if in_degree[node] == 0)
        order: List[WorkNode] = []

        while queue:
            node = queue.popleft()
            order.append(node)
            for dependent in self._dependents[node]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    queue.append(dependent)

        if len(order) != len(self._nodes):
            raise ValueError("Graph is not a DAG (cycle detected)")

        return order

    def filter(self, predicate: Callable[[WorkNode], bool]) -> "DependencyGraph":
        """
        返回只包含满足条件节点的新图

        指向被移除节点的边一并丢弃，节点对象本身复用。
        """
        kept = [node for node in self._nodes if predicate(node)]
        kept_set = set(kept)
        edges = [
            (dependency, dependent)
            for dependency, dependent in self.edges
            if dependency in kept_set and dependent in kept_set
        ]
        return DependencyGraph(kept, edges)
