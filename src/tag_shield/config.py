"""YAML/dict config loader for tag-shield.

Supports loading from a YAML file or a plain dict (for embedding in an
editor's settings, which nest under ``djangoTemplateExtension``).

Example YAML:

    tag_shield:
      wrap_tags_in_comments: true
      enable_formatting: true
      template_folder_names:
        - templates
        - template
      target_languages:
        - typescript
        - javascript
      prettier:
        executable: prettier
        xml_plugin: "@prettier/plugin-xml"
        timeout: 30
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from .formatter import MaskedFormatter
from .prettier_layer import PrettierFormatter
from .session import DEFAULT_TARGET_LANGUAGES, TagWrapSession

_SECTIONS = ("tag_shield", "djangoTemplateExtension")

# Editor-style camelCase keys accepted as aliases
_ALIASES = {
    "wrapDjangoTagsInComments": "wrap_tags_in_comments",
    "enableFormatting": "enable_formatting",
    "templateFolderNames": "template_folder_names",
}


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nesting under a section key or flat
    for section in _SECTIONS:
        if section in data:
            data = data[section] or {}
            break
    data = {_ALIASES.get(k, k): v for k, v in data.items()}

    prettier = data.get("prettier") or {}
    return {
        "wrap_tags_in_comments": bool(data.get("wrap_tags_in_comments", True)),
        "enable_formatting": bool(data.get("enable_formatting", True)),
        "template_folder_names": list(data.get("template_folder_names", ["templates", "template"])),
        "target_languages": frozenset(data.get("target_languages", DEFAULT_TARGET_LANGUAGES)),
        "prettier_executable": prettier.get("executable", "prettier"),
        "prettier_xml_plugin": prettier.get("xml_plugin"),
        "prettier_timeout": float(prettier.get("timeout", 30.0)),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml  # only needed for file-based config
    with open(Path(path).expanduser(), encoding="utf-8") as f:
        return load_config(yaml.safe_load(f))


def _normalized(config: dict[str, Any]) -> dict[str, Any]:
    return config if "prettier_executable" in config else load_config(config)


def create_session(config: dict[str, Any]) -> TagWrapSession:
    """Create a wrap session from a config dict."""
    cfg = _normalized(config)
    return TagWrapSession(
        enabled=cfg["wrap_tags_in_comments"],
        target_languages=cfg["target_languages"],
    )


def create_formatter(config: dict[str, Any]) -> MaskedFormatter:
    """Create a prettier-backed formatter from a config dict."""
    cfg = _normalized(config)
    return MaskedFormatter(
        formatter=PrettierFormatter(
            executable=cfg["prettier_executable"],
            xml_plugin=cfg["prettier_xml_plugin"],
            timeout=cfg["prettier_timeout"],
        ),
        enabled=cfg["enable_formatting"],
        template_folder_names=cfg["template_folder_names"],
    )
