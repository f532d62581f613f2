"""Attachment event carrying an error message about a source file."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, TextIO

from gherkinkit.ast import Location


@dataclass
class AttachmentEvent:
    """An attachment reporting ``data`` at ``location`` in the file ``uri``."""

    uri: Optional[str]
    location: Location
    data: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the event as a JSON-ready dictionary."""
        location: dict[str, int] = {"line": self.location.line}
        if self.location.column > 0:
            location["column"] = self.location.column
        return {
            "attachment": {
                "data": self.data or "",
                "source": {
                    "location": location,
                    "uri": self.uri or "",
                },
            }
        }

    def to_json(self) -> str:
        """Return the event as compact JSON on one line."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    def print(self, file: TextIO) -> None:
        """Write the event to ``file`` as one line of JSON."""
        file.write(self.to_json())
        file.write("\n")