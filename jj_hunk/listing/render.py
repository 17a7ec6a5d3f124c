"""Render listed files as JSON, YAML, or text.

Also builds file-level summaries, grouped views, and ready-to-edit spec
templates from the same listed files.
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

import yaml

from jj_hunk.diff.engine import split_lines
from jj_hunk.diff.types import FileDiff, Hunk
from jj_hunk.select.spec import Action


class ListFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    TEXT = "text"


class ListGrouping(str, Enum):
    NONE = "none"
    DIRECTORY = "directory"
    EXTENSION = "extension"
    STATUS = "status"


class ListMode(str, Enum):
    FULL = "full"
    FILES = "files"
    SPEC_TEMPLATE = "spec-template"


_STATUS_CHARS = {
    "modified": "M",
    "added": "A",
    "removed": "D",
    "renamed": "R",
    "copied": "C",
}


@dataclass(frozen=True)
class ListedFile:
    """A file as shown by ``list``: its diff and the hunks on display."""

    diff: FileDiff
    hunks: tuple[Hunk, ...]

    @property
    def path(self) -> str:
        return self.diff.path

    @property
    def status(self) -> str:
        return self.diff.status.value


def _flags_and_rename(listed: ListedFile, data: dict[str, Any]) -> dict[str, Any]:
    if listed.diff.rename_from is not None:
        data["rename"] = {"from": listed.diff.rename_from, "to": listed.path}
    if listed.diff.is_binary:
        data["binary"] = True
    if listed.diff.truncated:
        data["truncated"] = True
    return data


def file_entry(listed: ListedFile) -> dict[str, Any]:
    """Full entry with hunks."""
    data: dict[str, Any] = {"path": listed.path, "status": listed.status}
    _flags_and_rename(listed, data)
    data["hunks"] = [hunk.to_dict() for hunk in listed.hunks]
    return data


def file_summary(listed: ListedFile) -> dict[str, Any]:
    """File-level entry with a hunk count instead of hunks."""
    data: dict[str, Any] = {"path": listed.path, "status": listed.status}
    _flags_and_rename(listed, data)
    data["hunk_count"] = len(listed.hunks)
    return data


def directory_group(path: str) -> str:
    parent = str(PurePosixPath(path).parent)
    return parent if parent not in ("", ".") else "."


def extension_group(path: str) -> str:
    suffix = PurePosixPath(path).suffix
    return suffix[1:] if suffix else "<no-ext>"


def group_key(listed: ListedFile, grouping: ListGrouping) -> str:
    if grouping is ListGrouping.DIRECTORY:
        return directory_group(listed.path)
    if grouping is ListGrouping.EXTENSION:
        return extension_group(listed.path)
    if grouping is ListGrouping.STATUS:
        return listed.status
    return ""


def build_list_output(
    files: list[ListedFile],
    grouping: ListGrouping = ListGrouping.NONE,
    mode: ListMode = ListMode.FULL,
) -> dict[str, Any]:
    """Build the ``files`` or ``groups`` document for FULL or FILES mode.

    Groups keep the order in which their first file appears.
    """
    to_entry = file_summary if mode is ListMode.FILES else file_entry
    if grouping is ListGrouping.NONE:
        return {"files": [to_entry(listed) for listed in files]}

    groups: dict[str, list[dict[str, Any]]] = {}
    for listed in files:
        groups.setdefault(group_key(listed, grouping), []).append(to_entry(listed))
    return {"groups": [{"name": name, "files": entries} for name, entries in groups.items()]}


def build_spec_template(files: list[ListedFile]) -> dict[str, Any]:
    """Spec listing every hunk id, defaulting unlisted files to reset."""
    template: dict[str, Any] = {}
    for listed in files:
        if not listed.hunks:
            if listed.diff.is_binary:
                template[listed.path] = {"action": Action.KEEP.value}
            continue
        template[listed.path] = {"ids": [hunk.id for hunk in listed.hunks]}
    return {"files": template, "default": Action.RESET.value}


def _status_char(status: str) -> str:
    return _STATUS_CHARS.get(status, "?")


def _display_lines(text: str) -> list[str]:
    return [line.rstrip("\n").removesuffix("\r") for line in split_lines(text)]


def _file_header(entry: dict[str, Any], tail: str = "") -> str:
    header = f"{_status_char(entry['status'])} {entry['path']}{tail}"
    rename = entry.get("rename")
    if rename:
        header += f" ({rename['from']} -> {rename['to']})"
    if entry.get("binary"):
        header += " [binary]"
    if entry.get("truncated"):
        header += " [truncated]"
    return header


def _format_entry_text(entry: dict[str, Any]) -> list[str]:
    lines = [_file_header(entry)]
    for hunk in entry["hunks"]:
        before, after = hunk["before"], hunk["after"]
        lines.append(
            f"  hunk {hunk['index']} {hunk['type']} {hunk['id']} "
            f"(before {before['start']}+{before['lines']} after {after['start']}+{after['lines']})"
        )
        lines.extend(f"    - {line}" for line in _display_lines(hunk["removed"]))
        lines.extend(f"    + {line}" for line in _display_lines(hunk["added"]))
    return lines


def _format_summary_text(entry: dict[str, Any]) -> list[str]:
    return [_file_header(entry, f" ({entry['hunk_count']} hunks)")]


def render_text(output: dict[str, Any], mode: ListMode = ListMode.FULL) -> str:
    """Human-readable listing."""
    formatter = _format_summary_text if mode is ListMode.FILES else _format_entry_text
    lines: list[str] = []

    if "groups" in output:
        groups = output["groups"]
        for position, group in enumerate(groups):
            name = group["name"] if group["name"] not in ("", ".") else "<root>"
            lines.append(f"{name}:")
            for entry in group["files"]:
                lines.extend(formatter(entry))
            if position + 1 < len(groups):
                lines.append("")
    else:
        for entry in output.get("files", []):
            lines.extend(formatter(entry))

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def render(data: dict[str, Any], fmt: ListFormat, mode: ListMode = ListMode.FULL) -> str:
    """Serialize a listing document in the requested format."""
    if fmt is ListFormat.JSON:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    if fmt is ListFormat.YAML:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return render_text(data, mode)
