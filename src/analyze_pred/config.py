"""Configuration management for the prediction preparation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .exceptions import ConfigurationError

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AnalyzerConfig:
    """Settings for one analyzer run."""

    prediction_file: Path
    fasta_file: Path
    output_dir: Path = Path(".")
    upstream: int = 10
    downstream: int = 10
    evalue: float = 0.5
    clamp_flanks: bool = False
    legacy_upstream: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.prediction_file = Path(self.prediction_file)
        self.fasta_file = Path(self.fasta_file)
        self.output_dir = Path(self.output_dir)

        if not self.prediction_file.exists():
            raise ConfigurationError(f"Prediction file not found: {self.prediction_file}")

        if not self.fasta_file.exists():
            raise ConfigurationError(f"FASTA file not found: {self.fasta_file}")

        for name in ("upstream", "downstream"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be a whole number, got {value!r}", parameter=name)

        if isinstance(self.evalue, bool) or not isinstance(self.evalue, (int, float)):
            raise ConfigurationError(f"Expectation cutoff must be a number, got {self.evalue!r}", parameter="evalue")

        if self.upstream < 0:
            raise ConfigurationError(f"Invalid upstream: {self.upstream}", parameter="upstream")

        if self.downstream < 0:
            raise ConfigurationError(f"Invalid downstream: {self.downstream}", parameter="downstream")

        if self.evalue < 0:
            raise ConfigurationError(f"Invalid expectation cutoff: {self.evalue}", parameter="evalue")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}", parameter="log_level")

    @classmethod
    def from_yaml(cls, yaml_file: Path, **overrides) -> "AnalyzerConfig":
        """Load configuration from YAML file; non-None overrides win."""
        yaml_file = Path(yaml_file)
        if not yaml_file.exists():
            raise ConfigurationError(f"Config file not found: {yaml_file}")

        try:
            with open(yaml_file, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML config: {e}", config_file=str(yaml_file))

        if not isinstance(data, dict):
            raise ConfigurationError("Top level must be a mapping", config_file=str(yaml_file))

        data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid config parameters: {e}", config_file=str(yaml_file))

    @classmethod
    def from_args(cls, args: dict, config_file: Optional[Path] = None) -> "AnalyzerConfig":
        """Create configuration from command-line arguments."""
        # Map command-line argument names to config field names
        arg_mapping = {
            'prediction': 'prediction_file',
            'fasta': 'fasta_file',
            'output_dir': 'output_dir',
            'upstream': 'upstream',
            'downstream': 'downstream',
            'evalue': 'evalue',
            'clamp_flanks': 'clamp_flanks',
            'legacy_upstream': 'legacy_upstream',
            'log_level': 'log_level',
        }

        config_args = {}
        for arg_name, config_name in arg_mapping.items():
            if arg_name in args and args[arg_name] is not None:
                config_args[config_name] = args[arg_name]

        # Store-true flags only override a config file when set
        for flag in ('clamp_flanks', 'legacy_upstream'):
            if config_args.get(flag) is False:
                del config_args[flag]

        if config_file is not None:
            return cls.from_yaml(config_file, **config_args)

        missing = [name for name in ('prediction_file', 'fasta_file') if name not in config_args]
        if missing:
            raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

        return cls(**config_args)
