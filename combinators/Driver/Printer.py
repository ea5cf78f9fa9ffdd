from typing import Any
import json

from combinators.Parsing.Combinators import Forward, Literal, Map, ParserNode, children
from combinators.Parsing.Compaction import reachable


def graph_json(root: ParserNode) -> dict[str, Any]:
    # Number the nodes in visiting order so edges (including the ones that close cycles) can refer to them by index.
    nodes = list(reachable(root))
    index = {id(node): i for i, node in enumerate(nodes)}

    described = []
    for i, node in enumerate(nodes):
        entry: dict[str, Any] = {"id": i, "kind": type(node).__name__}
        match node:
            case Literal(lower=lower, upper=upper):
                entry["range"] = [lower, upper]
            case Map(transform=transform):
                entry["transform"] = getattr(transform, "__qualname__", repr(transform))
            case Forward(name=name):
                entry["name"] = name
        entry["children"] = [index[id(child)] for child in children(node)]
        described.append(entry)

    return {"root": 0, "nodes": described}


def format_json(json_dict: dict[str, Any]) -> str:
    # Ranges over arbitrary element types fall back to their repr.
    return json.dumps(json_dict, default=repr)


def save_json(json_dict: dict[str, Any], file_path: str) -> None:
    with open(file_path, "w") as file:
        file.write(format_json(json_dict))
