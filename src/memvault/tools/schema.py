"""Argument schema and agent-facing description for the memory tool."""

from __future__ import annotations

from typing import Any

from memvault.core.commands import Command
from memvault.core.paths import VIRTUAL_ROOT

PATH_PATTERN = rf"^\s*{VIRTUAL_ROOT}(/|\s*$)"
TRAVERSAL_PATTERN = r"\.\.|%2[eE]%2[eEfF]|%2[eE]%5[cC]"


def _path_property(description: str) -> dict[str, Any]:
    return {
        "type": "string",
        "description": description,
        "pattern": PATH_PATTERN,
        "not": {"pattern": TRAVERSAL_PATTERN},
    }


MEMORY_ARGS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "command": {
            "type": "string",
            "enum": [command.value for command in Command],
            "description": "The sub-command to execute.",
        },
        "path": _path_property(
            "Target path for view, create, str_replace, insert and delete. "
            f"Must be inside {VIRTUAL_ROOT}."
        ),
        "view_range": {
            "type": "array",
            "items": {"type": "integer", "minimum": 1},
            "minItems": 2,
            "maxItems": 2,
            "description": "Inclusive 1-based line range [start, end] for view.",
        },
        "file_text": {
            "type": "string",
            "description": "Content for create (creates or overwrites).",
        },
        "old_str": {
            "type": "string",
            "minLength": 1,
            "description": "Exact text to find for str_replace.",
        },
        "new_str": {
            "type": "string",
            "description": "Replacement text for str_replace.",
        },
        "insert_line": {
            "type": "integer",
            "minimum": 1,
            "description": "1-based line number for insert.",
        },
        "insert_text": {
            "type": "string",
            "description": "Text to insert at insert_line.",
        },
        "old_path": _path_property(
            f"Source path for rename. Must be inside {VIRTUAL_ROOT}."
        ),
        "new_path": _path_property(
            f"Destination path for rename. Must be inside {VIRTUAL_ROOT}."
        ),
        "overwrite": {
            "type": "boolean",
            "description": "Allow rename to replace an existing destination.",
        },
    },
    "required": ["command"],
    "additionalProperties": False,
}

def describe(field_name: str) -> str:
    return MEMORY_ARGS_SCHEMA["properties"][field_name]["description"]


MEMORY_TOOL_ANNOTATIONS: dict[str, Any] = {
    "title": "Memory Management Tool",
    "readOnlyHint": False,
    "destructiveHint": True,
    "idempotentHint": False,
    "openWorldHint": False,
}

MEMORY_TOOL_DESCRIPTION = f"""\
Persistent storage for memory across conversation sessions. Use it to keep
user preferences, project context and other facts worth remembering.

Before responding to a new conversation, view {VIRTUAL_ROOT} to check for
existing context:
    memory("view", path="{VIRTUAL_ROOT}")

Commands:
- view: list a directory recursively or show a file (optional view_range)
- create: create or overwrite a file with file_text
- str_replace: replace the first exact occurrence of old_str with new_str
- insert: insert insert_text at 1-based insert_line
- delete: delete a file or a directory and everything under it
- rename: move old_path to new_path (set overwrite to replace a target)

Guidelines:
- Files may live at any depth, e.g. {VIRTUAL_ROOT}/projects/web/notes.md
- Prefer updating existing files over creating new ones
- Delete outdated files to keep memory clean
- Always view a file before str_replace or insert to get its exact text

Examples:
    memory("create", path="{VIRTUAL_ROOT}/user_preferences.md", file_text="# Preferences\\n")
    memory("view", path="{VIRTUAL_ROOT}/notes.md", view_range=[1, 10])
    memory("str_replace", path="{VIRTUAL_ROOT}/notes.md", old_str="old", new_str="new")
    memory("insert", path="{VIRTUAL_ROOT}/notes.md", insert_line=5, insert_text="## Section")
    memory("delete", path="{VIRTUAL_ROOT}/old_notes.md")
    memory("rename", old_path="{VIRTUAL_ROOT}/temp.md", new_path="{VIRTUAL_ROOT}/user_info.md")
"""
