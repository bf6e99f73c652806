"""
Export configuration.

The "export" section of the JSON configuration file:

    {
      "export": {
        "base_iri": "http://www.example.org/",
        "ec_iri": "http://www.example.org/ec#",
        "element_class": "BisCore:Element",
        "code_spec_class": "BisCore:CodeSpec",
        "show_progress": true,
        "strict": false
      },
      "logging": {...}
    }
"""

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict

from constants import NamespaceConfig

from .validators import InputValidator


@dataclass
class ExportConfig:
    """
    Settings of one export run.

    Attributes:
        base_iri: Root of the schema and instance namespace IRIs.
        ec_iri: IRI of the ec upper vocabulary.
        element_class: Class whose RDF name prefixes the element code properties.
        code_spec_class: Class code spec instances are typed with.
        show_progress: Show tqdm progress bars.
        strict: Log skipped values at warning level instead of debug.
    """
    base_iri: str = NamespaceConfig.BASE_IRI
    ec_iri: str = NamespaceConfig.EC_IRI
    element_class: str = NamespaceConfig.ELEMENT_CLASS
    code_spec_class: str = NamespaceConfig.CODE_SPEC_CLASS
    show_progress: bool = True
    strict: bool = False

    def __post_init__(self) -> None:
        self.base_iri = InputValidator.validate_namespace_iri(self.base_iri)
        self.ec_iri = InputValidator.validate_namespace_iri(self.ec_iri)
        for name in ("element_class", "code_spec_class"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty class full name")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ExportConfig':
        """Create ExportConfig from a dictionary (the whole config or its "export" section)."""
        export_config = config_dict.get('export', config_dict)
        if not isinstance(export_config, dict):
            raise ValueError(f"'export' configuration must be an object, got {type(export_config).__name__}")
        return cls(
            base_iri=export_config.get('base_iri', NamespaceConfig.BASE_IRI),
            ec_iri=export_config.get('ec_iri', NamespaceConfig.EC_IRI),
            element_class=export_config.get('element_class', NamespaceConfig.ELEMENT_CLASS),
            code_spec_class=export_config.get('code_spec_class', NamespaceConfig.CODE_SPEC_CLASS),
            show_progress=bool(export_config.get('show_progress', True)),
            strict=bool(export_config.get('strict', False)),
        )

    @classmethod
    def from_file(cls, config_path: str) -> 'ExportConfig':
        """Load configuration from a JSON file."""
        if not config_path:
            raise ValueError("config_path cannot be empty")

        validated_path = InputValidator.validate_config_file_path(config_path)
        try:
            with open(validated_path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")
        except UnicodeDecodeError as e:
            raise ValueError(f"Encoding error reading {config_path}: {e}")

        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration file must contain a JSON object, got {type(config_dict)}")

        return cls.from_dict(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
