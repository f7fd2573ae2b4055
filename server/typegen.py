"""Generate TypeScript types from Pydantic models.

Exports JSON schemas from the diagram and server payload models and renders
TypeScript declarations for the React Flow frontend.

Usage:
    drug-flow-typegen                     # print to stdout
    drug-flow-typegen path/to/types.ts    # write a file (parents created)
"""

import sys
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from diagram import (
    Action,
    AnswerNode,
    DiagramEdge,
    DiagramState,
    DrugReviewNode,
    EventType,
    FlowEdge,
    FlowNode,
    FlowNodeData,
    FlowState,
    FollowUpNode,
    NodeKind,
    Position,
    PromptNode,
    QuestionNode,
)

from .events import JsonPatchOp
from .payloads import AuthoringEventRequest, CreateSessionRequest, SessionResponse, SessionStats

ENUMS: list[type[Enum]] = [NodeKind, Action, EventType]

MODELS: list[type[BaseModel]] = [
    # Diagram types
    Position,
    DrugReviewNode,
    FollowUpNode,
    QuestionNode,
    AnswerNode,
    PromptNode,
    DiagramEdge,
    DiagramState,
    # React Flow projection
    FlowNodeData,
    FlowNode,
    FlowEdge,
    FlowState,
    # AG-UI types
    JsonPatchOp,
    # API types
    CreateSessionRequest,
    AuthoringEventRequest,
    SessionStats,
    SessionResponse,
]

JSON_TO_TS = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
    "null": "null",
    "object": "Record<string, unknown>",
    "array": "unknown[]",
}


def literal_union(values: list[Any]) -> str:
    """Render enum/const values as a TypeScript literal union."""
    return " | ".join(f"'{v}'" if isinstance(v, str) else str(v).lower() for v in values)


def resolve_type(schema: dict[str, Any]) -> str:
    """Resolve a JSON Schema fragment to a TypeScript type expression."""
    if "$ref" in schema:
        return schema["$ref"].rsplit("/", 1)[-1]

    if "const" in schema:
        return literal_union([schema["const"]])

    if "enum" in schema:
        return literal_union(schema["enum"])

    # Discriminated unions render as oneOf, plain unions as anyOf
    for key in ("oneOf", "anyOf"):
        if key in schema:
            members = [resolve_type(member) for member in schema[key]]
            return " | ".join(dict.fromkeys(members))

    if "allOf" in schema and len(schema["allOf"]) == 1:
        return resolve_type(schema["allOf"][0])

    json_type = schema.get("type")
    if json_type == "array":
        item_type = resolve_type(schema.get("items", {}))
        return f"({item_type})[]" if " | " in item_type else f"{item_type}[]"

    if json_type == "object":
        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            return f"Record<string, {resolve_type(additional)}>"
        return "Record<string, unknown>"

    if isinstance(json_type, list):
        return " | ".join(JSON_TO_TS.get(t, "unknown") for t in json_type)

    return JSON_TO_TS.get(json_type, "unknown")


def render_enum(enum_cls: type[Enum]) -> str:
    return f"export type {enum_cls.__name__} = {literal_union([m.value for m in enum_cls])};"


def render_model(name: str, schema: dict[str, Any], indent: str = "  ") -> str:
    """Render an object schema as a TypeScript interface."""
    required = set(schema.get("required", []))
    lines = [f"export interface {name} {{"]
    for prop_name, prop_schema in schema.get("properties", {}).items():
        optional = "" if prop_name in required else "?"
        lines.append(f"{indent}{prop_name}{optional}: {resolve_type(prop_schema)};")
    lines.append("}")
    return "\n".join(lines)


def render_typescript(
    models: list[type[BaseModel]] = MODELS,
    enums: list[type[Enum]] = ENUMS,
) -> str:
    """Render enums, then every model and any nested definition not listed."""
    lines: list[str] = [
        "/**",
        " * AUTO-GENERATED TypeScript types from Python Pydantic models.",
        " * Do not edit manually - regenerate using: drug-flow-typegen",
        " */",
        "",
    ]
    generated: set[str] = set()

    for enum_cls in enums:
        lines += [render_enum(enum_cls), ""]
        generated.add(enum_cls.__name__)

    definitions: dict[str, dict[str, Any]] = {}
    for model in models:
        schema = model.model_json_schema()
        definitions.update(schema.pop("$defs", {}))
        if model.__name__ not in generated:
            lines += [render_model(model.__name__, schema), ""]
            generated.add(model.__name__)

    for name, schema in definitions.items():
        if name in generated:
            continue
        if "enum" in schema:
            lines += [f"export type {name} = {literal_union(schema['enum'])};", ""]
        else:
            lines += [render_model(name, schema), ""]
        generated.add(name)

    lines.append(
        "export type DiagramNode = "
        + " | ".join(cls.__name__ for cls in (DrugReviewNode, FollowUpNode, QuestionNode, AnswerNode, PromptNode))
        + ";"
    )
    return "\n".join(lines) + "\n"


def main() -> None:
    """Main entry point."""
    output = render_typescript()
    if len(sys.argv) < 2:
        sys.stdout.write(output)
        return

    output_path = Path(sys.argv[1])
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(output)
    print(f"Generated {output_path} ({len(ENUMS)} enums, {len(MODELS)} models)")


if __name__ == "__main__":
    main()
