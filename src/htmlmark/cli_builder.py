#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Dynamic CLI argument builder for htmlmark.

Command-line flags for ``ConversionOptions`` are generated from the dataclass
fields and their metadata rather than declared by hand, so a new option only
needs a field with ``help`` metadata to show up on the command line.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import MISSING, Field, fields, is_dataclass
from typing import Any, Dict, Optional, Type

from htmlmark.options import ConversionOptions

logger = logging.getLogger(__name__)

# Annotations arrive as strings because option modules use postponed evaluation
_TYPE_MAPPING: Dict[str, type] = {
    "bool": bool,
    "int": int,
    "float": float,
    "str": str,
}


class DynamicCLIBuilder:
    """Builds argparse arguments from an options dataclass.

    Parameters
    ----------
    options_class : type, default ConversionOptions
        Frozen dataclass whose fields become CLI flags

    """

    def __init__(self, options_class: Type[Any] = ConversionOptions) -> None:
        """Initialize the CLI builder."""
        if not is_dataclass(options_class):
            raise TypeError(f"{options_class!r} is not a dataclass")
        self.options_class = options_class
        self.dest_to_cli_flag: Dict[str, str] = {}

    @staticmethod
    def snake_to_kebab(name: str) -> str:
        """Convert snake_case to kebab-case."""
        return name.replace("_", "-")

    @staticmethod
    def resolve_field_type(field: Field) -> Any:
        """Map a (possibly string) field annotation to a concrete type."""
        field_type = field.type
        if isinstance(field_type, str):
            return _TYPE_MAPPING.get(field_type.strip(), field_type)
        return field_type

    def infer_cli_name(self, field_name: str, is_boolean_with_true_default: bool = False) -> str:
        """Infer the CLI flag for a field.

        Parameters
        ----------
        field_name : str
            Dataclass field name
        is_boolean_with_true_default : bool
            Whether this is a boolean field with default=True, which gets a
            ``--no-*`` flag

        Returns
        -------
        str
            CLI argument name with -- prefix

        Examples
        --------
            >>> DynamicCLIBuilder().infer_cli_name("max_depth")
            '--max-depth'
            >>> DynamicCLIBuilder().infer_cli_name("extended_syntax", True)
            '--no-extended-syntax'

        """
        kebab_name = self.snake_to_kebab(field_name)
        if is_boolean_with_true_default and not kebab_name.startswith("no-"):
            kebab_name = f"no-{kebab_name}"
        return f"--{kebab_name}"

    def get_argument_kwargs(self, field: Field, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """Build ``add_argument`` kwargs from a field and its metadata."""
        kwargs: Dict[str, Any] = {"dest": field.name, "help": metadata.get("help", f"Configure {field.name}")}
        field_type = self.resolve_field_type(field)

        if field_type is bool:
            kwargs["action"] = "store_false" if field.default is True else "store_true"
            kwargs["default"] = field.default if field.default is not MISSING else False
            return kwargs

        if "choices" in metadata:
            kwargs["choices"] = list(metadata["choices"])
        if metadata.get("type") in (int, float):
            kwargs["type"] = metadata["type"]
        elif field_type in (int, float):
            kwargs["type"] = field_type

        if field.default is not MISSING and field.default is not None:
            kwargs["default"] = field.default
            kwargs["help"] += f" (default: {field.default})"
        return kwargs

    def add_options_arguments(self, parser: argparse.ArgumentParser, group_name: Optional[str] = None) -> None:
        """Add one argument per CLI-visible field of the options class."""
        group = parser.add_argument_group(group_name) if group_name else parser

        for field in fields(self.options_class):
            metadata = dict(field.metadata or {})
            if metadata.get("exclude_from_cli", False):
                continue

            is_bool_true_default = self.resolve_field_type(field) is bool and field.default is True
            if "cli_name" in metadata:
                cli_name = f"--{metadata['cli_name']}"
            else:
                cli_name = self.infer_cli_name(field.name, is_bool_true_default)

            group.add_argument(cli_name, **self.get_argument_kwargs(field, metadata))
            self.dest_to_cli_flag[field.name] = cli_name

    def map_args_to_options(self, parsed_args: argparse.Namespace) -> Dict[str, Any]:
        """Collect option values from parsed arguments.

        Only fields whose value differs from the dataclass default are
        returned, so the result can be passed straight to ``convert``.

        Parameters
        ----------
        parsed_args : argparse.Namespace
            Parsed command line arguments

        Returns
        -------
        dict
            Field names mapped to values

        """
        args_dict = vars(parsed_args)
        options: Dict[str, Any] = {}
        for field in fields(self.options_class):
            if field.name not in self.dest_to_cli_flag or field.name not in args_dict:
                continue
            value = args_dict[field.name]
            if value is None or value == field.default:
                continue
            options[field.name] = value
        logger.debug("Options from command line: %s", options)
        return options
