#!/usr/bin/env python3
"""
KUBEHINTS EXPORTER - Receiver Block Rendering
---------------------------------------------
Author: KubeHints Team
Date: 2026-10-19
"""

import io
from typing import Any, List, Union

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from kubehints.core.models import ReceiverTemplate


class TemplateExporter:
    """
    Renders resolved receiver templates as a collector `receivers:` block.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096
        self.preferred_order = ["endpoint"]

    def _to_commented(self, data: Any) -> Any:
        """
        Recursively converts plain containers, keeping preferred keys first
        and every other key in document order.
        """
        if isinstance(data, dict):
            keys = list(data.keys())

            def sort_logic(key):
                if key in self.preferred_order:
                    return self.preferred_order.index(key)
                return len(self.preferred_order) + keys.index(key)

            ordered = CommentedMap()
            for key in sorted(keys, key=sort_logic):
                ordered[key] = self._to_commented(data[key])
            return ordered
        if isinstance(data, list):
            return CommentedSeq(self._to_commented(item) for item in data)
        return data

    def export(self, templates: Union[ReceiverTemplate, List[ReceiverTemplate]]) -> str:
        templates = templates if isinstance(templates, list) else [templates]

        receivers = CommentedMap()
        for template in templates:
            if template is None:
                continue
            entry = CommentedMap()
            entry["config"] = self._to_commented(template.config)
            entry["signals"] = CommentedSeq(template.signals.names())
            receivers[str(template.identity)] = entry

        stream = io.StringIO()
        document = CommentedMap()
        document["receivers"] = receivers
        self.yaml.dump(document, stream)
        return stream.getvalue()
