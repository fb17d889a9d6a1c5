# stepsearch/core/interchange.py
# Import/export of the JSON tree format shared with the tree editor and renderer.
from __future__ import annotations
import json
import math
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator, model_validator

from ..errors import ConfigurationError, describe_validation_error
from .node import Node
from .problem import Problem


def encode_number(x: Optional[float]):
    if x is None:
        return None
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if float(x).is_integer():
        return int(x)
    return x


def decode_number(raw, field_name: str = "value") -> Optional[float]:
    if raw is None:
        return None
    if isinstance(raw, str):
        if raw in ("Infinity", "inf", "+Infinity"):
            return math.inf
        if raw in ("-Infinity", "-inf"):
            return -math.inf
    if isinstance(raw, bool):
        raise ConfigurationError(f"{field_name} must be a number, got {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{field_name} must be a number, got {raw!r}") from e


class TreeSpec(BaseModel):
    """One authored node of a user-built tree (the custom-tree problem replays these).

    Fields validate under their interchange (camelCase) names; presentation-only keys such
    as ``isVisited`` are ignored.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str = ""
    value: Optional[float] = None
    cost_to_parent: Optional[float] = Field(default=None, alias="costToParent")
    is_goal: bool = Field(default=False, alias="isGoal")
    board_state: Optional[List[Any]] = Field(default=None, alias="boardState")
    children: List["TreeSpec"] = Field(default_factory=list)
    alpha: Optional[float] = None
    beta: Optional[float] = None
    is_pruned: bool = Field(default=False, alias="isPruned")
    pruning_triggered_by: Optional[str] = Field(default=None, alias="pruningTriggeredBy")
    is_cutoff_point: bool = Field(default=False, alias="isCutoffPoint")

    @model_validator(mode="before")
    @classmethod
    def default_name(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            if isinstance(data.get("id"), (int, float)) and not isinstance(data.get("id"), bool):
                data["id"] = str(data["id"])
            data.setdefault("name", data.get("id"))
        return data

    @field_validator("value", "cost_to_parent", "alpha", "beta", mode="before")
    @classmethod
    def decode_numbers(cls, v: Any, info: ValidationInfo) -> Optional[float]:
        return decode_number(v, info.field_name)

    @model_validator(mode="after")
    def unique_ids(self) -> "TreeSpec":
        seen = set()
        for spec in self.walk():
            if spec.id in seen:
                raise ValueError(f"duplicate tree node id {spec.id!r}")
            seen.add(spec.id)
        return self

    def walk(self) -> Iterator["TreeSpec"]:
        stack = [self]
        while stack:
            spec = stack.pop()
            yield spec
            stack.extend(reversed(spec.children))


def _validate_node(raw: Dict[str, Any], path: str) -> TreeSpec:
    try:
        return TreeSpec.model_validate({**raw, "children": []})
    except ValidationError as e:
        raise ConfigurationError(f"tree node at {path}: {describe_validation_error(e)}") from e


def tree_from_dict(data: Dict[str, Any]) -> TreeSpec:
    """Parse an interchange tree, validating that every node has a unique id.

    Nodes are validated one at a time on an explicit stack, since authored or exported
    trees can be deeper than the recursion limit.
    """
    seen = set()
    root: Optional[TreeSpec] = None
    stack = [(data, None, "root")]
    while stack:
        raw, parent, path = stack.pop()
        if not isinstance(raw, dict):
            raise ConfigurationError(f"tree node at {path} must be an object, got {type(raw).__name__}")
        children = raw.get("children") or []
        if not isinstance(children, list):
            raise ConfigurationError(f"tree node at {path}: children must be an array")
        spec = _validate_node(raw, path)
        if spec.id in seen:
            raise ConfigurationError(f"duplicate tree node id {spec.id!r}")
        seen.add(spec.id)
        if parent is None:
            root = spec
        else:
            parent.children.append(spec)
        # reversed so children pop (and attach) in authored order
        stack.extend((c, spec, f"{path}/{i}") for i, c in reversed(list(enumerate(children))))
    return root


def _optional_fields(out: Dict[str, Any], alpha, beta, is_pruned, pruned_by, is_cutoff) -> None:
    if alpha is not None:
        out["alpha"] = encode_number(alpha)
    if beta is not None:
        out["beta"] = encode_number(beta)
    if is_pruned:
        out["isPruned"] = True
    if pruned_by is not None:
        out["pruningTriggeredBy"] = pruned_by
    if is_cutoff:
        out["isCutoffPoint"] = True


def _spec_fields(spec: TreeSpec) -> Dict[str, Any]:
    out: Dict[str, Any] = {"id": spec.id, "name": spec.name}
    if spec.value is not None:
        out["value"] = encode_number(spec.value)
    if spec.cost_to_parent is not None:
        out["costToParent"] = encode_number(spec.cost_to_parent)
    out["isGoal"] = spec.is_goal
    if spec.board_state is not None:
        out["boardState"] = list(spec.board_state)
    _optional_fields(out, spec.alpha, spec.beta, spec.is_pruned,
                     spec.pruning_triggered_by, spec.is_cutoff_point)
    out["children"] = []
    return out


def tree_to_dict(spec: TreeSpec) -> Dict[str, Any]:
    root_out = _spec_fields(spec)
    stack = [(spec, root_out)]
    while stack:
        cur, out = stack.pop()
        for child in cur.children:
            child_out = _spec_fields(child)
            out["children"].append(child_out)
            stack.append((child, child_out))
    return root_out


def node_to_dict(node: Node, problem: Problem) -> Dict[str, Any]:
    """Export a live search tree (any algorithm) in the interchange format.

    Iterative, since depth-first trees can be deeper than the recursion limit.
    """
    root_out = _node_fields(node, problem)
    stack = [(node, root_out)]
    while stack:
        cur, out = stack.pop()
        for child in cur.children:
            child_out = _node_fields(child, problem)
            out["children"].append(child_out)
            stack.append((child, child_out))
    return root_out


def _node_fields(node: Node, problem: Problem) -> Dict[str, Any]:
    if node.value is not None:
        value = node.value
    elif node.visit_count:
        value = node.mean_value
    else:
        value = node.h
    out: Dict[str, Any] = {
        "id": node.id,
        "name": problem.node_name(node.state, node.action) if node.parent is not None else "Start",
        "value": encode_number(value),
        "costToParent": encode_number(node.g - node.parent.g) if node.parent is not None else 0,
        "isGoal": bool(problem.is_goal(node.state)),
    }
    board = problem.board_state(node.state)
    if board is not None:
        out["boardState"] = board
    _optional_fields(out, node.alpha, node.beta, node.is_pruned, node.pruned_by, node.is_cutoff_point)
    if node.superseded_by is not None:
        out["supersededBy"] = node.superseded_by
    if node.visit_count:
        out["visits"] = node.visit_count
    out["children"] = []
    return out


def load_tree(path: Union[str, Path]) -> TreeSpec:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path} is not valid JSON: {e}") from e
    return tree_from_dict(data)


def dump_tree(tree: Union[TreeSpec, Dict[str, Any]], path: Union[str, Path]) -> Path:
    data = tree_to_dict(tree) if isinstance(tree, TreeSpec) else tree
    path = Path(path)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
