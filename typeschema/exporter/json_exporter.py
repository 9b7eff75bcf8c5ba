"""JSON exporter."""
import json
import logging
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, Iterable

from typeschema.introspection.graph import merge_definitions
from typeschema.schema.models import DEFINITIONS_PREFIX, ObjectGraph, Schema
from typeschema.types.kinds import SchemaPrimitiveKind

logger = logging.getLogger(__name__)


class JsonExporter:
    """Export derived schemas as a Swagger definitions document."""

    def __init__(
        self,
        ref_prefix: str = DEFINITIONS_PREFIX,
        title: str = "Derived definitions",
        version: str = "1.0.0",
    ):
        self.ref_prefix = ref_prefix
        self.title = title
        self.version = version

    def build_document(self, schemas: Iterable[Schema]) -> Dict[str, Any]:
        """Merge the definitions of every schema into one document."""
        schemas = list(schemas)
        definitions: ObjectGraph = {}
        for schema in schemas:
            merge_definitions(definitions, schema.definitions)

        for obj in definitions.values():
            for prop in obj.all_properties():
                if prop.kind == SchemaPrimitiveKind.UNKNOWN and not prop.reference:
                    logger.warning(f"{obj.name} has a property of unsupported type {prop.descriptor}")
                    break

        return {
            "swagger": "2.0",
            "info": {
                "title": self.title,
                "version": self.version,
            },
            "x-generated-at": datetime.now().isoformat(),
            "x-roots": {schema.name: schema.ref for schema in schemas},
            "definitions": {
                name: obj.to_dict(self.ref_prefix) for name, obj in sorted(definitions.items())
            },
        }

    def export(self, output_file: Path, schemas: Iterable[Schema]) -> Dict[str, Any]:
        """Export to JSON file and return the written document."""
        output_file.parent.mkdir(parents=True, exist_ok=True)

        data = self.build_document(schemas)

        with open(output_file, "w") as f:
            json.dump(data, f, indent=2, default=str)

        logger.info(f"Wrote {len(data['definitions'])} definitions to {output_file}")
        return data
