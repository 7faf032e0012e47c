"""Validation and clean-up of the JSON schemas sent as hosted tool metadata."""

from typing import Any, Dict, Set, Type

import jsonref  # type: ignore
from pydantic import BaseModel

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS = ("$defs", "$schema", "$id", "title", "definitions")


class SchemaValidator:
    """
    Helper class for turning argument models into the flat JSON schema
    that a hosted function tool carries in its ``parameters`` metadata.
    """

    @classmethod
    def parameters_schema(cls, args_model: Type[BaseModel]) -> Dict[str, Any]:
        """Build a self-contained parameters schema from a Pydantic model.

        Args:
            args_model: The model describing the tool's arguments.

        Returns:
            A schema with every ``$ref`` inlined and provider-unfriendly keys removed.

        Raises:
            ToolValidationError: If the model is recursive.
        """
        raw_schema = args_model.model_json_schema()
        cls.assert_no_recursive_refs(raw_schema)
        # proxies=False gives plain dicts instead of JsonRef objects
        resolved = jsonref.replace_refs(raw_schema, proxies=False)
        return cls.sanitize_schema(resolved)

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Walks every local ``$ref`` and fails if a definition reaches itself.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def walk(node: Any, seen: Set[str]) -> None:
            if isinstance(node, list):
                for item in node:
                    walk(item, seen)
                return
            if not isinstance(node, dict):
                return

            ref = node.get("$ref")
            if ref is None:
                for value in node.values():
                    walk(value, seen)
                return

            if ref in seen:
                msg = (
                    f"Recursive structure detected: {ref}. "
                    "Hosted tools cannot take recursive arguments. "
                    "Flatten the structure, e.g. with parent ids or lists."
                )
                logger.error(msg)
                raise ToolValidationError(msg)

            # e.g. #/$defs/Location
            if ref.startswith("#"):
                def_name = ref.rsplit("/", 1)[-1]
                if def_name in defs:
                    walk(defs[def_name], seen | {ref})

        walk(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Removes $defs, $schema, $id, title and definitions.
        Collapses ``anyOf`` of a single type plus null into that type.
        Sets ``additionalProperties: false`` on objects that do not declare it.

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        cleaned = {k: v for k, v in schema.items() if k not in _METADATA_KEYS}

        variants = cleaned.get("anyOf")
        if isinstance(variants, list):
            non_null = [v for v in variants if not (isinstance(v, dict) and v.get("type") == "null")]
            if len(non_null) == 1 and isinstance(non_null[0], dict):
                collapsed = dict(non_null[0])
                # The outer description wins over the variant's
                if "description" in cleaned:
                    collapsed["description"] = cleaned["description"]
                if "default" in cleaned:
                    collapsed["default"] = cleaned["default"]
                return SchemaValidator.sanitize_schema(collapsed)

        if cleaned.get("type") == "object":
            cleaned.setdefault("additionalProperties", False)

        for key, value in cleaned.items():
            if isinstance(value, dict):
                cleaned[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                cleaned[key] = [SchemaValidator.sanitize_schema(item) for item in value]

        return cleaned
