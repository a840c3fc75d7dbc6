"""Process hierarchy tree building for ImpactIQ."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from impactiq.models import ProcessNode

logger = logging.getLogger(__name__)

PATH_SEPARATOR = " > "


@dataclass
class ProcessTreeNode:
    """A process together with its child processes."""

    node: ProcessNode
    children: list["ProcessTreeNode"] = field(default_factory=list)

    def walk(self) -> Iterable["ProcessTreeNode"]:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()


def _sort_key(tree_node: ProcessTreeNode) -> tuple[int, int, str]:
    node = tree_node.node
    return (node.level_number, node.sort_order, node.process_code)


def build_hierarchy_tree(nodes: Iterable[ProcessNode]) -> list[ProcessTreeNode]:
    """Link flat hierarchy rows into a forest.

    Nodes without a parent, or whose parent is not in the input, become
    roots. A parent cycle is broken by promoting the first node of the
    cycle (in input order) to a root. Siblings are ordered by level, sort
    order, then process code.
    Nodes without an id cannot be referenced as parents.
    """
    tree_nodes = [ProcessTreeNode(node=node) for node in nodes]
    by_id = {t.node.id: t for t in tree_nodes if t.node.id is not None}

    roots: list[ProcessTreeNode] = []
    for tree_node in tree_nodes:
        parent_id = tree_node.node.parent_id
        parent = by_id.get(parent_id) if parent_id else None
        if parent is None or parent is tree_node:
            if parent_id:
                logger.warning(
                    "Process %s references unknown parent %s, treating as root",
                    tree_node.node.process_code,
                    parent_id,
                )
            roots.append(tree_node)
        else:
            parent.children.append(tree_node)

    # Nodes on a parent cycle are unreachable from every root
    reached = {id(t) for root in roots for t in root.walk()}
    for tree_node in tree_nodes:
        if id(tree_node) in reached:
            continue
        parent = by_id[tree_node.node.parent_id]
        parent.children = [c for c in parent.children if c is not tree_node]
        logger.warning(
            "Process %s is part of a parent cycle, treating as root",
            tree_node.node.process_code,
        )
        roots.append(tree_node)
        reached.update(id(t) for t in tree_node.walk())

    for tree_node in tree_nodes:
        tree_node.children.sort(key=_sort_key)
    roots.sort(key=_sort_key)

    logger.debug("Built hierarchy: %d nodes, %d roots", len(tree_nodes), len(roots))
    return roots


def flatten_hierarchy(
    tree: Iterable[ProcessTreeNode],
    parent_path: str = "",
) -> list[dict[str, object]]:
    """Flatten a forest into depth-first rows for export.

    Each row carries the node's fields plus level_label and the
    hierarchy_path of process names from the root ("Finance > Payables").
    """
    rows: list[dict[str, object]] = []
    for tree_node in tree:
        node = tree_node.node
        path = (
            f"{parent_path}{PATH_SEPARATOR}{node.process_name}"
            if parent_path
            else node.process_name
        )
        rows.append(
            {
                "id": node.id,
                "process_code": node.process_code,
                "process_name": node.process_name,
                "level_number": node.level_number,
                "level_label": node.level_label,
                "parent_id": node.parent_id,
                "sort_order": node.sort_order,
                "hierarchy_path": path,
            }
        )
        rows.extend(flatten_hierarchy(tree_node.children, path))
    return rows
