"""Field selection: `?fields=id,name,address{city,street}`."""

from typing import Any, Dict, List, Optional

from ..errors import RestfulApiError
from .bag import ErrorBag
from .models import FieldObject, FieldStructure

ROOT_NAMESPACE = "$"


def parse_fields(raw: str) -> List[FieldObject]:
    """
    Parses a field selection string into a tree of FieldObjects.

    Braces open a sub-selection on the preceding name. Raises RestfulApiError
    on unbalanced braces or a sub-selection without a field name.
    """
    stack: List[List[FieldObject]] = [[]]
    pending: List[str] = []
    name = ""

    def flush() -> None:
        nonlocal name
        if name.strip():
            stack[-1].append(FieldObject(name=name.strip()))
        name = ""

    for char in raw:
        if char == ",":
            flush()
        elif char == "{":
            if not name.strip():
                raise RestfulApiError("Sub-selection '{' must follow a field name", "fields")
            pending.append(name.strip())
            name = ""
            stack.append([])
        elif char == "}":
            if len(stack) == 1:
                raise RestfulApiError("Unexpected '}' in field selection", "fields")
            flush()
            children = stack.pop()
            stack[-1].append(FieldObject(name=pending.pop(), sub_fields=children))
        else:
            name += char

    if len(stack) != 1:
        raise RestfulApiError("Unclosed '{' in field selection", "fields")
    flush()
    return stack[0]


def build_structure_index(
    declaration: Dict[str, Any], namespace: str = ROOT_NAMESPACE
) -> Dict[str, FieldStructure]:
    """
    Flattens a declared field structure into `{path: FieldStructure}`.

    A leaf is declared as "atomic" (or None), a nested dict declares an
    `object` field and a one-item list holding a dict declares a `collection`.
    """
    index: Dict[str, FieldStructure] = {}

    for name, declared in declaration.items():
        path = f"{namespace}.{name}"
        if declared is None or declared == "atomic":
            index[path] = FieldStructure(name=name, namespace=namespace, type="atomic")
        elif isinstance(declared, dict):
            index[path] = FieldStructure(
                name=name, namespace=namespace, type="object", children=list(declared)
            )
            index.update(build_structure_index(declared, path))
        elif isinstance(declared, list) and len(declared) == 1 and isinstance(declared[0], dict):
            index[path] = FieldStructure(
                name=name, namespace=namespace, type="collection", children=list(declared[0])
            )
            index.update(build_structure_index(declared[0], path))
        else:
            raise TypeError(f"Invalid structure declaration for field '{path}': {declared!r}")

    return index


class FieldSelector:
    """Decodes and validates the field selection of a request."""

    component = "fields"

    def __init__(self, structure: Dict[str, Any], raw: Any = None):
        self.structure = build_structure_index(structure)
        self._selection = self._decode(raw)

    def _decode(self, raw: Any) -> List[FieldObject]:
        if raw is None or raw == "":
            return []
        if isinstance(raw, (list, tuple)):
            if not all(isinstance(item, str) for item in raw):
                raise RestfulApiError("Field selection list must contain strings", self.component)
            raw = ",".join(raw)
        if not isinstance(raw, str):
            raise RestfulApiError(
                f"Field selection must be a string, got {type(raw).__name__}", self.component
            )
        return parse_fields(raw)

    def fields(self, namespace: str = ROOT_NAMESPACE) -> List[FieldObject]:
        """Fields selected directly under `namespace` (e.g. "$" or "$.address")."""
        current = self._selection
        for name in namespace.split(".")[1:]:
            match = next((field for field in current if field.name == name), None)
            if match is None:
                return []
            current = match.sub_fields
        return list(current)

    def get_field_structure(self, path: str) -> Optional[FieldStructure]:
        return self.structure.get(path)

    def validate(self) -> ErrorBag:
        bag = ErrorBag()
        self._validate_level(self._selection, ROOT_NAMESPACE, bag)
        return bag

    def _validate_level(self, fields: List[FieldObject], namespace: str, bag: ErrorBag) -> None:
        for field in fields:
            path = f"{namespace}.{field.name}"
            structure = self.structure.get(path)
            if structure is None:
                bag.add(self.component, f"Unknown field '{path}'")
                continue
            if field.sub_fields:
                if structure.type == "atomic":
                    bag.add(self.component, f"Field '{path}' is atomic and has no sub-fields")
                    continue
                self._validate_level(field.sub_fields, path, bag)
