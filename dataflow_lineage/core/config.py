"""
Configuration Module
====================

Configuration management for the lineage system.

This module provides:
- Config: Main configuration class
- TraversalConfig: Depth limits for reachability queries
- DiagramConfig: Mermaid diagram settings
- HealthConfig: Health score weights and thresholds
- VisualizationConfig: Static visualization settings
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Tuple
from pathlib import Path
import json
import os

from dataflow_lineage.core.errors import ConfigError


@dataclass
class TraversalConfig:
    """
    Configuration for reachability traversal.

    Attributes:
        default_max_depth: Depth used when none (or an invalid one) is given
        min_depth: Lower clamp for requested depths
        max_depth: Upper clamp for requested depths
    """
    default_max_depth: int = 3
    min_depth: int = 1
    max_depth: int = 10

    def __post_init__(self):
        if self.min_depth < 1 or self.max_depth < self.min_depth:
            raise ConfigError(
                f"Invalid traversal bounds: [{self.min_depth}, {self.max_depth}]"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)


@dataclass
class DiagramConfig:
    """
    Configuration for Mermaid diagram generation.

    Attributes:
        direction: Mermaid graph direction for lineage diagrams
        max_nodes: Node limit for overview diagrams
        dataset_style: classDef body for dataset nodes
        dataflow_style: classDef body for dataflow nodes
        dataset_highlight_style: classDef body for a highlighted dataset
        dataflow_highlight_style: classDef body for a highlighted dataflow
    """
    direction: str = "TD"
    max_nodes: int = 50
    dataset_style: str = "fill:#e1f5fe,stroke:#01579b,stroke-width:2px"
    dataflow_style: str = "fill:#f3e5f5,stroke:#4a148c,stroke-width:2px"
    dataset_highlight_style: str = "fill:#ffd54f,stroke:#f57c00,stroke-width:3px"
    dataflow_highlight_style: str = "fill:#ffcc80,stroke:#e65100,stroke-width:3px"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)


@dataclass
class HealthConfig:
    """
    Configuration for the pipeline health score.

    Attributes:
        failure_weight: Points deducted at a 100% failure rate
        orphan_weight: Points deducted at a 100% orphan rate
        complexity_penalty: Flat deduction for complex dataflows
        complexity_threshold: Average inputs above which the penalty applies
    """
    failure_weight: float = 30.0
    orphan_weight: float = 20.0
    complexity_penalty: float = 10.0
    complexity_threshold: float = 10.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)


@dataclass
class VisualizationConfig:
    """
    Configuration for static visualization.

    Attributes:
        dpi: Resolution for output images
        figsize: Figure size for lineage plots
        dataset_color: Fill colour for datasets
        dataflow_color: Fill colour for dataflows
        highlight_color: Fill colour for the seed node
    """
    dpi: int = 150
    figsize: Tuple[float, float] = (16, 10)
    dataset_color: str = '#AED6F1'
    dataflow_color: str = '#D7BDE2'
    highlight_color: str = '#FFD54F'

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = asdict(self)
        data['figsize'] = list(self.figsize)
        return data


@dataclass
class Config:
    """
    Main configuration for the lineage system.

    Attributes:
        traversal: Traversal configuration
        diagram: Diagram configuration
        health: Health score configuration
        visualization: Visualization configuration
        log_level: Logging level name
        verbose: Whether to print progress to the console
    """
    traversal: TraversalConfig = field(default_factory=TraversalConfig)
    diagram: DiagramConfig = field(default_factory=DiagramConfig)
    health: HealthConfig = field(default_factory=HealthConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)
    log_level: str = "WARNING"
    verbose: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'traversal': self.traversal.to_dict(),
            'diagram': self.diagram.to_dict(),
            'health': self.health.to_dict(),
            'visualization': self.visualization.to_dict(),
            'log_level': self.log_level,
            'verbose': self.verbose,
        }

    def save(self, path: Path) -> None:
        """Save configuration to JSON file"""
        path = Path(path)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> 'Config':
        """Load configuration from JSON file"""
        path = Path(path)
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration file {path}: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create configuration from dictionary"""
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object")

        visualization = dict(data.get('visualization', {}))
        if 'figsize' in visualization:
            visualization['figsize'] = tuple(visualization['figsize'])

        try:
            return cls(
                traversal=TraversalConfig(**data.get('traversal', {})),
                diagram=DiagramConfig(**data.get('diagram', {})),
                health=HealthConfig(**data.get('health', {})),
                visualization=VisualizationConfig(**visualization),
                log_level=data.get('log_level', 'WARNING'),
                verbose=data.get('verbose', True),
            )
        except TypeError as e:
            raise ConfigError(f"Unknown configuration key: {e}") from e


def get_default_config() -> Config:
    """Get default configuration"""
    return Config()


def _env_int(name: str) -> int:
    value = os.getenv(name)
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def get_config_from_env() -> Config:
    """
    Create configuration from environment variables.

    Environment variables:
        LINEAGE_MAX_DEPTH: Default traversal depth
        LINEAGE_DIAGRAM_MAX_NODES: Node limit for overview diagrams
        LINEAGE_LOG_LEVEL: Logging level name
        LINEAGE_VERBOSE: Verbosity (true/false)
        LINEAGE_DPI: DPI for visualizations
    """
    config = Config()

    if os.getenv('LINEAGE_MAX_DEPTH'):
        config.traversal.default_max_depth = _env_int('LINEAGE_MAX_DEPTH')

    if os.getenv('LINEAGE_DIAGRAM_MAX_NODES'):
        config.diagram.max_nodes = _env_int('LINEAGE_DIAGRAM_MAX_NODES')

    if os.getenv('LINEAGE_LOG_LEVEL'):
        config.log_level = os.getenv('LINEAGE_LOG_LEVEL').upper()

    if os.getenv('LINEAGE_VERBOSE'):
        config.verbose = os.getenv('LINEAGE_VERBOSE').lower() == 'true'

    if os.getenv('LINEAGE_DPI'):
        config.visualization.dpi = _env_int('LINEAGE_DPI')

    return config


__all__ = [
    "Config",
    "TraversalConfig",
    "DiagramConfig",
    "HealthConfig",
    "VisualizationConfig",
    "get_default_config",
    "get_config_from_env",
]
