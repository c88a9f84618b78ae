"""Report rendering for json-schema-diff."""

from __future__ import annotations

import io
import json

from rich.console import Console
from rich.text import Text

from .models import ChangeRecord, ChangeType, OutputFormat
from .utils import format_value


GROUP_ORDER = (
    ChangeType.ADDITION,
    ChangeType.REMOVAL,
    ChangeType.MODIFICATION,
    ChangeType.TYPE_CHANGE,
)

GROUP_LABELS = {
    ChangeType.ADDITION: "ADDITIONS",
    ChangeType.REMOVAL: "REMOVALS",
    ChangeType.MODIFICATION: "MODIFICATIONS",
    ChangeType.TYPE_CHANGE: "TYPE CHANGES",
}

GROUP_STYLES = {
    ChangeType.ADDITION: "bold green",
    ChangeType.REMOVAL: "bold red",
    ChangeType.MODIFICATION: "bold yellow",
    ChangeType.TYPE_CHANGE: "bold magenta",
}


class Formatter:
    """
    Renders a list of changes as JSON or as a grouped text report.

    Usage:
        formatter = Formatter(OutputFormat.PRETTY, use_color=False)
        print(formatter.format(changes))
    """

    def __init__(
        self,
        output_format: OutputFormat | str = OutputFormat.PRETTY,
        use_color: bool = True
    ):
        self.output_format = OutputFormat(output_format)
        self.use_color = use_color

    def format(self, changes: list[ChangeRecord]) -> str:
        if self.output_format == OutputFormat.JSON:
            return self.format_json(changes)
        return self.format_pretty(changes)

    def format_json(self, changes: list[ChangeRecord]) -> str:
        return json.dumps(
            [change.to_dict() for change in changes],
            indent=2,
            ensure_ascii=False
        )

    def format_pretty(self, changes: list[ChangeRecord]) -> str:
        if not changes:
            return "No changes detected."

        lines: list[Text] = [
            Text("JSON Schema Diff Results", style="bold cyan"),
            Text("=" * 50),
        ]

        for change_type in GROUP_ORDER:
            group = [c for c in changes if c.change_type == change_type]
            if not group:
                continue

            lines.append(Text())
            lines.append(Text(
                f"{GROUP_LABELS[change_type]} ({len(group)}):",
                style=GROUP_STYLES[change_type]
            ))
            lines.append(Text())
            for change in group:
                lines.extend(self._format_change(change))

        noisy_count = sum(1 for c in changes if c.is_noisy)
        lines.append(Text())
        lines.append(Text("SUMMARY:", style="bold blue"))
        lines.append(Text(f"Total changes: {len(changes)}"))
        lines.append(Text(f"Noisy fields: {noisy_count}"))

        return self._render(lines)

    def _format_change(self, change: ChangeRecord) -> list[Text]:
        info = change.field_info
        lines = []

        path_line = Text(f"  {change.path}")
        if info.type:
            type_desc = info.type if isinstance(info.type, str) else "|".join(map(str, info.type))
            if info.format:
                type_desc += f", {info.format}"
            path_line.append(f" ({type_desc})")
        if change.is_noisy:
            path_line.append(" [noisy]", style="yellow")
        lines.append(path_line)

        if info.title:
            lines.append(Text(f"    Title: {info.title}"))

        if info.enum:
            allowed = ", ".join(self._enum_label(v) for v in info.enum)
            lines.append(Text(f"    Allowed values: {allowed}"))

        if change.change_type == ChangeType.ADDITION:
            lines.append(self._value_line("+ Added:", "green", change.new_value))
        elif change.change_type == ChangeType.REMOVAL:
            lines.append(self._value_line("- Removed:", "red", change.old_value))
        else:
            lines.append(self._value_line("- Old:", "red", change.old_value))
            lines.append(self._value_line("+ New:", "green", change.new_value))

        lines.append(Text())
        return lines

    @staticmethod
    def _enum_label(value) -> str:
        if isinstance(value, str):
            return value
        return format_value(value)

    @staticmethod
    def _value_line(label: str, style: str, value) -> Text:
        line = Text("    ")
        line.append(label, style=style)
        line.append(f" {format_value(value)}")
        return line

    def _render(self, lines: list[Text]) -> str:
        console = Console(
            file=io.StringIO(),
            record=True,
            force_terminal=self.use_color,
            color_system="standard" if self.use_color else None,
            highlight=False,
            soft_wrap=True,
            width=10000,
        )
        for line in lines:
            console.print(line)
        return console.export_text(styles=self.use_color).rstrip("\n")
