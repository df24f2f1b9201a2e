"""
Configuration management for the methylation KDE analysis.

Supports loading configurations from YAML files for:
- Input data location and column
- KDE parameters (bandwidth, grid, domain)
- Output artifact names
- Visualization settings
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..exceptions import ConfigError

SECTIONS = ("data", "kde_params", "output", "viz_params", "report")


class Config:
    """
    Central configuration class for the methylation KDE analysis.

    Attributes:
        base_dir: Root directory that relative paths are resolved against
        data: Input file, sheet and column settings
        kde_params: Bandwidth, grid step, domain bounds and method
        output: Output directory and artifact file names
        viz_params: Visualization settings
        report: Text report settings
    """

    def __init__(
        self,
        config_file: Optional[Union[str, Path]] = None,
        base_dir: Optional[Union[str, Path]] = None
    ):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file. If None, uses defaults.
            base_dir: Directory for resolving relative paths. Defaults to
                the project root.
        """
        if base_dir is None:
            self.base_dir = Path(__file__).parent.parent.parent
        else:
            self.base_dir = Path(base_dir)

        self._init_defaults()

        if config_file:
            self._load_yaml(config_file)

    def _init_defaults(self):
        """Initialize default configuration values."""
        self.data = {
            "path": "data/HLA_BISseq.xlsx",
            "sheet": 0,
            "column": "average"
        }

        self.kde_params = {
            "bandwidth": 0.05,
            "grid_step": 0.01,
            "domain_low": 0.0,
            "domain_high": 1.0,
            "method": "direct"
        }

        self.output = {
            "dir": "figures",
            "histogram_file": "HLA_histogram_KDE.pdf",
            "minima_plot_file": "HLA_histogram_KDE_minima.pdf",
            "report_file": "HLA_KDE_minima_report.txt"
        }

        self.report = {
            "title": "HLA methylation KDE analysis"
        }

        self.viz_params = {
            "dpi": 300,
            "format": "pdf",
            "hist_bins": 20,
            "figure_sizes": {
                "wide": (10, 6)
            },
            "font_sizes": {
                "title": 12,
                "label": 11,
                "tick": 10,
                "legend": 9
            },
            "colors": {
                "histogram": "#69b3a2",
                "histogram_edge": "white",
                "kde": "#ff6b6b",
                "minima": "red"
            },
            "labels": {
                "title": "Histogram + KDE",
                "x": "Average methylation",
                "y": "Density"
            }
        }

    def _load_yaml(self, config_file: Union[str, Path]):
        """Load configuration from YAML file."""
        config_path = Path(config_file)
        if not config_path.is_absolute():
            config_path = self.base_dir / config_path

        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        self._update_from_dict(config_data or {})

    def _update_from_dict(self, config_dict: Dict[str, Any]):
        """Update configuration from dictionary."""
        if not isinstance(config_dict, dict):
            raise ConfigError("Configuration root must be a mapping")

        for section in SECTIONS:
            if section not in config_dict:
                continue
            values = config_dict[section]
            if not isinstance(values, dict):
                raise ConfigError(f"Config section '{section}' must be a mapping")
            target = getattr(self, section)
            for key, value in values.items():
                # Merge one level down so partial overrides keep the defaults
                if isinstance(value, dict) and isinstance(target.get(key), dict):
                    target[key] = {**target[key], **value}
                else:
                    target[key] = value

    def update(self, section: str, **values: Any) -> "Config":
        """
        Override individual settings, skipping values that are None.

        Args:
            section: Name of the section to update (e.g. "kde_params")
            **values: Settings to override

        Returns:
            self, for chaining
        """
        if section not in SECTIONS:
            raise ConfigError(f"Unknown config section: {section}")
        self._update_from_dict(
            {section: {k: v for k, v in values.items() if v is not None}}
        )
        return self

    def resolve_path(self, path: Union[str, Path]) -> Path:
        """Resolve a path relative to the base directory if not absolute."""
        path = Path(path)
        if not path.is_absolute():
            path = self.base_dir / path
        return path

    def get_input_path(self) -> Path:
        """Get full path of the input data file."""
        return self.resolve_path(self.data["path"])

    def get_output_dir(self) -> Path:
        """Get full path of the output directory."""
        return self.resolve_path(self.output["dir"])

    def get_output_path(self, key: str, output_dir: Optional[Path] = None) -> Path:
        """Get output path for the artifact named by ``key``."""
        if key not in self.output:
            raise ConfigError(f"Unknown output artifact: {key}")
        return (output_dir or self.get_output_dir()) / self.output[key]

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep copy of all sections."""
        return {section: copy.deepcopy(getattr(self, section)) for section in SECTIONS}

    def __repr__(self) -> str:
        return (
            f"Config(input='{self.data['path']}', "
            f"column='{self.data['column']}', "
            f"bandwidth={self.kde_params['bandwidth']}, "
            f"base_dir='{self.base_dir}')"
        )


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    base_dir: Optional[Union[str, Path]] = None
) -> Config:
    """
    Load configuration for the analysis pipeline.

    Args:
        config_file: Path to custom YAML configuration file
        base_dir: Directory for resolving relative paths

    Returns:
        Config object with all settings loaded

    Example:
        >>> config = load_config("configs/default.yaml")
        >>> config.kde_params["bandwidth"]
        0.05
    """
    return Config(config_file=config_file, base_dir=base_dir)
