#!/usr/bin/env python3
"""
SHELLCONF EXPORTER - Structured Output
--------------------------------------
Renders parsed assignments in the machine-readable forms: JSON records
and an order-preserving YAML mapping. The shell form lives in serializer.

Author: ShellConf Team
Date: 2026-10-18
"""

import io
import json
from typing import Dict, Iterable, Optional

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from shellconf.core.models import Assignment
from shellconf.parsing.serializer import serialize


class ConfExporter:
    """
    Converts an ordered name/value mapping into text. Key order is always
    the order of the mapping handed in.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        # Long values must never be folded across lines
        self.yaml.width = 4096
        self.yaml.indent(mapping=2, sequence=4, offset=2)

    def to_shell(self, data: Dict[str, str], prefix: Optional[str] = None) -> str:
        return "\n".join(serialize(name, value, prefix) for name, value in data.items())

    def to_json(self, data: Dict[str, str], indent: Optional[int] = 2) -> str:
        return json.dumps(data, indent=indent, ensure_ascii=False)

    def to_yaml(self, data: Dict[str, str], header: Optional[str] = None) -> str:
        doc = CommentedMap()
        for name, value in data.items():
            doc[name] = value
        if header:
            doc.yaml_set_start_comment(header)

        stream = io.StringIO()
        self.yaml.dump(doc, stream)
        return stream.getvalue()

    def to_records(self, assignments: Iterable[Assignment]) -> Iterable[str]:
        """One compact JSON object per assignment, for line-oriented output."""
        for a in assignments:
            yield json.dumps({"name": a.name, "value": a.value}, ensure_ascii=False)
