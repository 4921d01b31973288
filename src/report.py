"""Rendering of resolved modules: console text, JSON and CSV exports."""

import csv
import json
import logging
import sys

from constants import Constants, ExitCodes


def _rows(module):
    if not module.resolved:
        return []
    return module.dependencies.entries()


def render_text(modules):
    """Render modules as padded title/dependency columns.

    Args:
        modules (list): Resolved ModuleRecord instances.

    Returns:
        str: Text block, one separator line after each module.
    """
    if not modules:
        return ""
    width = max(len(m.title) for m in modules) + Constants.TITLE_PADDING
    lines = []
    for module in modules:
        rows = _rows(module)
        first = rows[0] if rows else ""
        lines.append(f"{module.title}{' ' * (width - len(module.title))} {first}".rstrip())
        for row in rows[1:]:
            lines.append(f"{' ' * width} {row}")
        lines.append(Constants.SEPARATOR)
    return "\n".join(lines) + "\n"


def export_json(modules, path):
    """Exports resolved modules to a JSON file.

    Args:
        modules (list): Resolved ModuleRecord instances.
        path (str): File path to export the JSON.
    """
    data = [m.to_dict() for m in modules]
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def export_csv(modules, path):
    """Exports resolved modules to a CSV file, one row per dependency entry.

    Args:
        modules (list): Resolved ModuleRecord instances.
        path (str): File path to export the CSV.
    """
    headers = ["Module", "Source", "Owner", "Name", "Location", "Dependency", "Requirement", "Note"]
    rows = [headers]
    for m in modules:
        base = [m.title, m.source, m.owner or "", m.name, m.location()]
        deps = m.dependencies
        if deps is None:
            rows.append(base + ["", "", ""])
        elif deps.found:
            for edge in deps.edges:
                rows.append(base + [edge.name, edge.requirement, ""])
        else:
            rows.append(base + ["", "", deps.reason])
    try:
        with open(path, "w", newline="", encoding="utf-8") as file:
            csv.writer(file).writerows(rows)
        logging.info("CSV file has been successfully exported at: %s", path)
    except (OSError, csv.Error) as e:
        logging.error("CSV file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
